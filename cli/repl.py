"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from typing import Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from common.exceptions import FileServiceError
from common.logging_config import get_logger
from cli.commands import (
    handle_copy,
    handle_delete,
    handle_list,
    handle_read,
    handle_url,
    handle_wait,
    handle_write,
)
from cli.constants import (
    COMMANDS,
    HELP_TEXT,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
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
from cli.parser import ParseError, parse_command

logger = get_logger(__name__)

HANDLERS: dict[type, Callable[..., str]] = {
    CopyCommand: handle_copy,
    DeleteCommand: handle_delete,
    ListCommand: handle_list,
    ReadCommand: handle_read,
    WriteCommand: handle_write,
    UrlCommand: handle_url,
    WaitCommand: handle_wait,
}


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    os.system("cls" if sys.platform == "win32" else "clear")


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj: CommandRequest) -> str:
    """Dispatch parsed command to its handler."""
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj)}"
    return handler(cmd_obj)


def run_line(line: str) -> str:
    """
    Parse and run one REPL line.

    Returns:
        Text to print; errors are reported as 'Error: ...'
    """
    try:
        return dispatch_command(parse_command(line))
    except ParseError as e:
        return f"Error: {e}"
    except (FileServiceError, OSError, ValueError) as e:
        logger.debug(f"Command failed: {line}", exc_info=True)
        return f"Error: {e}"


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    session: PromptSession = PromptSession(
        completer=WordCompleter(COMMANDS, ignore_case=True),
        history=InMemoryHistory(),
        style=STYLE,
    )
    show_welcome()

    while True:
        try:
            line = session.prompt([("class:prompt", PROMPT_TEXT)]).strip()
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break

        if not line:
            continue
        if line == "exit":
            print("Goodbye!")
            break
        if line == "help":
            print(HELP_TEXT)
        elif line == "clear":
            clear_screen()
            show_welcome()
        else:
            print(run_line(line))
