"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ListCommand:
    """List a directory, optionally page by page."""

    path: str = "/"
    page_size: int = 0
    command: Literal["ls"] = "ls"


@dataclass(frozen=True)
class StatCommand:
    """Show attributes of a path."""

    path: str
    command: Literal["stat"] = "stat"


@dataclass(frozen=True)
class CatCommand:
    """Print a whole file."""

    path: str
    command: Literal["cat"] = "cat"


@dataclass(frozen=True)
class ReadCommand:
    """Print a byte range of a file."""

    path: str
    offset: int
    length: int
    command: Literal["read"] = "read"


CommandRequest = ListCommand | StatCommand | CatCommand | ReadCommand
