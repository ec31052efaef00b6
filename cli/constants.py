"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["copy", "delete", "list", "read", "write", "url", "wait", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#F45935 bold",
        "command": "#0088ff bold",
    }
)

WELCOME_TITLE = "fss3 - local and S3 file service"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "fss3> "

HELP_TEXT = """Available commands:
  copy <source> <destination> [--overwrite] [--no-skip-same] [--concurrency N]
                                      Copy a file or folder (cp)
  delete <location> [--concurrency N] Delete a file or everything under a folder (rm)
  list <location>                     List files at or under a location (ls)
  read <location>                     Print a file's text content (cat)
  write <location> <text> [--overwrite]
                                      Write text to a file
  url <s3-location> [--expires SECONDS]
                                      Print a temporary download URL
  wait <location>                     Block until a file exists
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Locations are local paths or s3://bucket/key.
Existing destination files are left alone unless --overwrite is given;
with --overwrite, files with identical content are still skipped unless
--no-skip-same is given.
Examples:
  copy photos/ s3://my-bucket/backup/photos/
  copy s3://my-bucket/backup/ restore/ --overwrite
  list s3://my-bucket/backup/
  write notes/todo.txt "buy milk"
  delete s3://my-bucket/tmp/"""
