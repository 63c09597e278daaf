"""Command parser for CLI input."""

import shlex

from cli.models import (
    CatCommand,
    CommandRequest,
    ListCommand,
    ReadCommand,
    StatCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of List/Stat/Cat/Read)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "ls":
        return _parse_ls(tokens[1:])
    elif command_name == "stat":
        return StatCommand(path=_single_path("stat", tokens[1:]))
    elif command_name == "cat":
        return CatCommand(path=_single_path("cat", tokens[1:]))
    elif command_name == "read":
        return _parse_read(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_ls(args: list[str]) -> ListCommand:
    """Parse 'ls [path] [-n N]' command."""
    path = None
    page_size = 0

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "-n":
            if i + 1 >= len(args):
                raise ParseError("-n requires a page size")
            page_size = _parse_int("page size", args[i + 1])
            i += 2
            continue
        if path is not None:
            raise ParseError("ls accepts at most one path")
        path = arg
        i += 1

    return ListCommand(path=path or "/", page_size=page_size)


def _parse_read(args: list[str]) -> ReadCommand:
    """Parse 'read <path> <offset> <length>' command."""
    if len(args) != 3:
        raise ParseError("read requires exactly 3 arguments: <path> <offset> <length>")

    path, offset, length = args
    offset_value = _parse_int("offset", offset)
    length_value = _parse_int("length", length)
    if offset_value < 0:
        raise ParseError("offset must not be negative")
    if length_value <= 0:
        raise ParseError("length must be positive")

    return ReadCommand(path=path, offset=offset_value, length=length_value)


def _single_path(command: str, args: list[str]) -> str:
    if len(args) != 1:
        raise ParseError(f"{command} requires exactly 1 argument: <path>")
    return args[0]


def _parse_int(label: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"Invalid {label}: {value}")
