"""Tests for CLI command handlers."""

import asyncio
import pytest
from unittest.mock import Mock
from cli import commands
from cli.commands import (
    handle_copy,
    handle_delete,
    handle_list,
    handle_read,
    handle_url,
    handle_wait,
    handle_write,
)
from cli.models import (
    CopyCommand,
    DeleteCommand,
    ListCommand,
    ReadCommand,
    UrlCommand,
    WaitCommand,
    WriteCommand,
)
from common.optional import Option
from common.types import S3File, WriteRequest
from fileservice.engine import FileService
from fileservice.options import WriteOptions


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_config):
    """Keep handlers away from the user's real config file."""
    monkeypatch.setattr(commands, '_config', temp_config)
    return temp_config


def put(service, location, body):
    asyncio.run(service.write(WriteRequest(destination=location, body=body), WriteOptions(overwrite=True)))


def test_handle_copy(memory_service):
    """Test copy reports every copied file."""
    put(memory_service, S3File('bkt', 'a/1.txt'), 'x')
    put(memory_service, S3File('bkt', 'a/2.txt'), 'y')

    cmd = CopyCommand(source='s3://bkt/a/', destination='s3://bkt/c/')
    result = handle_copy(cmd, service=memory_service)

    assert 'Copied: s3://bkt/a/1.txt -> s3://bkt/c/1.txt' in result
    assert 'Copied: s3://bkt/a/2.txt -> s3://bkt/c/2.txt' in result
    assert result.endswith('2 file(s) copied')


def test_handle_copy_skips_existing(memory_service):
    """Test copy without overwrite leaves existing files."""
    put(memory_service, S3File('bkt', 'a/1.txt'), 'new')
    put(memory_service, S3File('bkt', 'c/1.txt'), 'old')

    result = handle_copy(CopyCommand(source='s3://bkt/a/', destination='s3://bkt/c/'), service=memory_service)

    assert result == '0 file(s) copied'
    assert asyncio.run(memory_service.read_text(S3File('bkt', 'c/1.txt'))).value == 'old'


def test_handle_copy_uses_configured_concurrency(monkeypatch, isolated_config):
    """Test copy through the shared service falls back to the configured concurrency."""
    isolated_config.set('concurrency', 3)
    mock_service = Mock(spec=FileService)

    async def fake_copy(source, destination, options):
        fake_copy.options = options

    mock_service.copy.side_effect = fake_copy
    monkeypatch.setattr(commands, '_service', mock_service)

    handle_copy(CopyCommand(source='a', destination='b', overwrite=True))

    assert fake_copy.options.concurrency == 3
    assert fake_copy.options.overwrite is True
    assert fake_copy.options.skip_same is True


def test_injected_service_does_not_read_config(monkeypatch, memory_service):
    """Test handlers given a service never touch the config file."""
    config = Mock()
    monkeypatch.setattr(commands, '_config', config)
    put(memory_service, S3File('bkt', 'a/1.txt'), 'x')

    handle_copy(CopyCommand(source='s3://bkt/a/', destination='s3://bkt/c/'), service=memory_service)
    handle_delete(DeleteCommand(target='s3://bkt/c/'), service=memory_service)

    config.get_settings.assert_not_called()


def test_handle_delete(memory_service):
    """Test delete reports every deleted file."""
    put(memory_service, S3File('bkt', 'a/1.txt'), 'x')

    result = handle_delete(DeleteCommand(target='s3://bkt/a/', concurrency=2), service=memory_service)

    assert 'Deleted: s3://bkt/a/1.txt' in result
    assert result.endswith('1 file(s) deleted')


def test_handle_list(memory_service):
    """Test list output lines."""
    put(memory_service, S3File('bkt', 'a/1.txt'), 'x')

    result = handle_list(ListCommand(target='s3://bkt/a/'), service=memory_service)

    assert result.startswith('s3://bkt/a/1.txt  1 bytes')


def test_handle_list_empty(memory_service):
    """Test list with nothing found."""
    result = handle_list(ListCommand(target='s3://bkt/none/'), service=memory_service)

    assert result == 'No files found at s3://bkt/none/'


def test_handle_read(memory_service):
    """Test reading file text."""
    put(memory_service, S3File('bkt', 'note.txt'), 'hello')

    assert handle_read(ReadCommand(target='s3://bkt/note.txt'), service=memory_service) == 'hello'


def test_handle_read_missing(memory_service):
    """Test reading a missing file."""
    result = handle_read(ReadCommand(target='s3://bkt/missing.txt'), service=memory_service)

    assert result == 'No such file: s3://bkt/missing.txt'


def test_handle_write(memory_service):
    """Test write then no-overwrite write."""
    result = handle_write(WriteCommand(destination='s3://bkt/foo/bar', body='hello'), service=memory_service)
    assert result.startswith('Written: s3://bkt/foo/bar  5 bytes')

    handle_write(WriteCommand(destination='s3://bkt/foo/bar', body='world'), service=memory_service)
    assert handle_read(ReadCommand(target='s3://bkt/foo/bar'), service=memory_service) == 'hello'

    handle_write(WriteCommand(destination='s3://bkt/foo/bar', body='world', overwrite=True), service=memory_service)
    assert handle_read(ReadCommand(target='s3://bkt/foo/bar'), service=memory_service) == 'world'


def test_handle_url():
    """Test url command with mocked service."""
    mock_service = Mock(spec=FileService)

    async def fake_url(location, expires):
        return Option.of(f'https://example.test/{location.key}?expires={expires}')

    mock_service.get_read_url.side_effect = fake_url

    result = handle_url(UrlCommand(target='s3://bkt/a.txt', expires=60), service=mock_service)

    assert result == 'https://example.test/a.txt?expires=60'


def test_handle_url_missing(memory_service):
    """Test url command for a missing file."""
    result = handle_url(UrlCommand(target='s3://bkt/missing.txt'), service=memory_service)

    assert result == 'No such file: s3://bkt/missing.txt'


def test_handle_wait_existing(memory_service):
    """Test wait returns immediately for an existing file."""
    put(memory_service, S3File('bkt', 'ready.txt'), 'ok')

    result = handle_wait(WaitCommand(target='s3://bkt/ready.txt'), service=memory_service)

    assert result.startswith('Found: s3://bkt/ready.txt')
