"""Command parser for CLI input."""

import shlex
from typing import Optional

from cli.models import (
    CommandRequest,
    CopyCommand,
    DeleteCommand,
    ListCommand,
    ReadCommand,
    UrlCommand,
    WaitCommand,
    WriteCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    return parse_tokens(tokens)


def parse_tokens(tokens: list[str]) -> CommandRequest:
    """Parse an already tokenized command line (e.g. sys.argv[1:])."""
    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name in ("copy", "cp"):
        return _parse_copy(args)
    elif command_name in ("delete", "rm"):
        return _parse_delete(args)
    elif command_name in ("list", "ls"):
        return _parse_list(args)
    elif command_name in ("read", "cat"):
        return _parse_read(args)
    elif command_name == "write":
        return _parse_write(args)
    elif command_name == "url":
        return _parse_url(args)
    elif command_name == "wait":
        return _parse_wait(args)
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _split_flags(args: list[str], value_flags: tuple[str, ...] = ()) -> tuple[list[str], dict[str, Optional[str]]]:
    """Separate --flags (and the values of value_flags) from positional arguments."""
    positional: list[str] = []
    flags: dict[str, Optional[str]] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg.startswith("--"):
            if arg in value_flags:
                if i + 1 >= len(args):
                    raise ParseError(f"{arg} requires a value")
                flags[arg] = args[i + 1]
                i += 2
                continue
            flags[arg] = None
        else:
            positional.append(arg)
        i += 1
    return positional, flags


def _parse_positive_int(flag: str, value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        raise ParseError(f"{flag} must be an integer, got '{value}'")
    if number < 1:
        raise ParseError(f"{flag} must be positive, got {number}")
    return number


def _reject_unknown(flags: dict[str, Optional[str]], allowed: tuple[str, ...]) -> None:
    unknown = [f for f in flags if f not in allowed]
    if unknown:
        raise ParseError(f"Unknown option: {unknown[0]}")


def _parse_copy(args: list[str]) -> CopyCommand:
    """Parse 'copy source destination [--overwrite] [--no-skip-same] [--concurrency N]'."""
    positional, flags = _split_flags(args, value_flags=("--concurrency",))
    _reject_unknown(flags, ("--overwrite", "--no-skip-same", "--concurrency"))
    if len(positional) != 2:
        raise ParseError("copy requires a source and a destination")

    return CopyCommand(
        source=positional[0],
        destination=positional[1],
        overwrite="--overwrite" in flags,
        skip_same="--no-skip-same" not in flags,
        concurrency=_parse_positive_int("--concurrency", flags.get("--concurrency")),
    )


def _parse_delete(args: list[str]) -> DeleteCommand:
    """Parse 'delete target [--concurrency N]'."""
    positional, flags = _split_flags(args, value_flags=("--concurrency",))
    _reject_unknown(flags, ("--concurrency",))
    if len(positional) != 1:
        raise ParseError("delete requires exactly one location")

    return DeleteCommand(
        target=positional[0],
        concurrency=_parse_positive_int("--concurrency", flags.get("--concurrency")),
    )


def _parse_list(args: list[str]) -> ListCommand:
    """Parse 'list target'."""
    if len(args) != 1:
        raise ParseError("list requires exactly one location")
    return ListCommand(target=args[0])


def _parse_read(args: list[str]) -> ReadCommand:
    """Parse 'read target'."""
    if len(args) != 1:
        raise ParseError("read requires exactly one location")
    return ReadCommand(target=args[0])


def _parse_write(args: list[str]) -> WriteCommand:
    """Parse 'write destination text [--overwrite]'."""
    positional, flags = _split_flags(args)
    _reject_unknown(flags, ("--overwrite",))
    if len(positional) != 2:
        raise ParseError("write requires a destination and the text to write")

    return WriteCommand(destination=positional[0], body=positional[1], overwrite="--overwrite" in flags)


def _parse_url(args: list[str]) -> UrlCommand:
    """Parse 'url target [--expires SECONDS]'."""
    positional, flags = _split_flags(args, value_flags=("--expires",))
    _reject_unknown(flags, ("--expires",))
    if len(positional) != 1:
        raise ParseError("url requires exactly one location")

    return UrlCommand(target=positional[0], expires=_parse_positive_int("--expires", flags.get("--expires")))


def _parse_wait(args: list[str]) -> WaitCommand:
    """Parse 'wait target'."""
    if len(args) != 1:
        raise ParseError("wait requires exactly one location")
    return WaitCommand(target=args[0])
