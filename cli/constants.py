"""CLI constants."""

from prompt_toolkit.styles import Style

COMMANDS = ["ls", "stat", "cat", "read", "clear", "exit", "help"]
PATH_COMMANDS = ("ls", "stat", "cat", "read")

STYLE = Style.from_dict(
    {
        "prompt": "#F45935 bold",
        "command": "#0088ff bold",
    }
)

RED_ORANGE = "\033[38;2;244;89;53m"
RESET = "\033[0m"

WELCOME_TITLE = f"{RED_ORANGE}RedCloud Reader{RESET} - read-only filesystem browser"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "redcloud-reader> "

HELP_TEXT = """Available commands:
  ls [path] [-n N]                    List a directory (N entries per page, 0 = all at once)
  stat <path>                         Show attributes of a file or directory
  cat <path>                          Print a whole file
  read <path> <offset> <length>       Print length bytes starting at offset
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  ls /data
  ls /data -n 100
  stat /data/events.log
  read /data/events.log 1048576 256"""
