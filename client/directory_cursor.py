"""Resumable paging over a remote directory listing."""

from typing import List, Protocol

from client.exceptions import EndOfFileError
from client.metadata_client import relative_entry_name
from common.logging_config import get_logger
from common.types import FileAttributes

logger = get_logger(__name__)


class ListingSource(Protocol):
    def get_listing(self, path: str, start_after: str = "", limit: int = 0) -> List[FileAttributes]:
        ...


class DirectoryCursor:
    """
    Walks a directory in pages.

    The token holds the name of the last entry already returned; an empty
    token means the start of the listing. Concatenating bounded pages until
    EOF yields the same entries, in the same order, as one unbounded call.
    """

    def __init__(self, metadata: ListingSource, path: str):
        self._metadata = metadata
        self._path = path
        self.token = ""

    def get_page(self, n: int) -> List[FileAttributes]:
        """
        Fetch the next page of entries.

        Args:
            n: Maximum number of entries; n <= 0 restarts from the beginning
               and returns the whole listing

        Raises:
            EndOfFileError: If n > 0 and no entries remain
            ListingIncompleteError: If an unbounded listing fails part-way
        """
        if n <= 0:
            self.token = ""
            return self._metadata.get_listing(self._path, "", 0)

        entries = self._metadata.get_listing(self._path, self.token, n)
        if not entries:
            raise EndOfFileError(f"end of directory {self._path}")

        self.token = relative_entry_name(self._path, entries[-1].name)
        logger.debug(f"Listed {len(entries)} entries of {self._path}, resuming after {self.token!r}")
        return entries
