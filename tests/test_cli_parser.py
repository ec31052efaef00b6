"""Tests for CLI command parsing and the one-shot entry point."""

import pytest
from cli import main as cli_main
from cli import repl
from cli.models import (
    CopyCommand,
    DeleteCommand,
    ListCommand,
    ReadCommand,
    UrlCommand,
    WaitCommand,
    WriteCommand,
)
from cli.parser import ParseError, parse_command, parse_tokens
from common.exceptions import BackendUnavailableError


class TestParseCommand:
    """Test parsing of each command."""

    def test_copy_defaults(self):
        cmd = parse_command('copy ./data s3://bucket/backup/')

        assert cmd == CopyCommand(source='./data', destination='s3://bucket/backup/')

    def test_copy_with_flags(self):
        cmd = parse_command('cp a b --overwrite --no-skip-same --concurrency 8')

        assert cmd.overwrite is True
        assert cmd.skip_same is False
        assert cmd.concurrency == 8

    def test_copy_quoted_paths(self):
        cmd = parse_command('copy "my docs/a.txt" "s3://bkt/my docs/a.txt"')

        assert cmd.source == 'my docs/a.txt'
        assert cmd.destination == 's3://bkt/my docs/a.txt'

    def test_delete(self):
        assert parse_command('rm s3://bkt/a/ --concurrency 2') == DeleteCommand(target='s3://bkt/a/', concurrency=2)

    def test_list_read_wait(self):
        assert parse_command('ls s3://bkt/') == ListCommand(target='s3://bkt/')
        assert parse_command('cat notes.txt') == ReadCommand(target='notes.txt')
        assert parse_command('wait s3://bkt/flag') == WaitCommand(target='s3://bkt/flag')

    def test_write(self):
        cmd = parse_command('write s3://bkt/foo/bar "hello world" --overwrite')

        assert cmd == WriteCommand(destination='s3://bkt/foo/bar', body='hello world', overwrite=True)

    def test_url(self):
        assert parse_command('url s3://bkt/a.txt --expires 60') == UrlCommand(target='s3://bkt/a.txt', expires=60)
        assert parse_command('url s3://bkt/a.txt').expires is None

    def test_parse_tokens(self):
        assert parse_tokens(['list', 'dir']) == ListCommand(target='dir')


class TestParseErrors:
    """Test rejected input."""

    @pytest.mark.parametrize('line', [
        '',
        '   ',
        'frobnicate x',
        'copy only-one',
        'copy a b c',
        'copy a b --force',
        'copy a b --concurrency',
        'copy a b --concurrency zero',
        'copy a b --concurrency 0',
        'delete',
        'list',
        'read a b',
        'write dest',
        'url a --expires -5',
        'copy "unterminated',
    ])
    def test_invalid_input(self, line):
        with pytest.raises(ParseError):
            parse_command(line)


class TestRunOnce:
    """Test one-shot execution exit codes."""

    def test_success(self, monkeypatch, capsys):
        monkeypatch.setattr(cli_main, 'dispatch_command', lambda cmd: f'listed {cmd.target}')

        assert cli_main.run_once(['ls', 's3://bkt/']) == 0
        assert capsys.readouterr().out.strip() == 'listed s3://bkt/'

    def test_parse_error(self, capsys):
        assert cli_main.run_once(['copy']) == 2
        assert capsys.readouterr().err.startswith('Error:')

    def test_backend_error(self, monkeypatch, capsys):
        def fail(cmd):
            raise BackendUnavailableError('S3 backend unavailable')

        monkeypatch.setattr(cli_main, 'dispatch_command', fail)

        assert cli_main.run_once(['ls', 's3://bkt/']) == 1
        assert 'S3 backend unavailable' in capsys.readouterr().err


class TestReplDispatch:
    """Test REPL line handling without a terminal."""

    def test_run_line_dispatches(self, monkeypatch):
        monkeypatch.setitem(repl.HANDLERS, ListCommand, lambda cmd: f'listed {cmd.target}')

        assert repl.run_line('ls s3://bkt/') == 'listed s3://bkt/'

    def test_run_line_reports_parse_error(self):
        assert repl.run_line('bogus').startswith('Error: Unknown command')

    def test_run_line_reports_backend_error(self, monkeypatch):
        def fail(cmd):
            raise FileNotFoundError('gone')

        monkeypatch.setitem(repl.HANDLERS, ReadCommand, fail)

        assert repl.run_line('cat x') == 'Error: gone'
