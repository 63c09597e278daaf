"""Read-only handle on a remote file or directory."""

import os
from typing import List

from client.block_locations import BlockLocationResolver
from client.block_stream import BlockStreamMultiplexer, BlockStreamOpener, ReaderState
from client.directory_cursor import DirectoryCursor
from client.exceptions import InvalidArgumentError, ListingIncompleteError
from common.logging_config import get_logger
from common.types import FileAttributes

logger = get_logger(__name__)


class FileHandle:
    """
    Seekable, read-only view of one path.

    The attributes are captured when the handle is opened and the block
    layout when it is first read; later changes to the file are not seen.
    A handle must be used by one thread at a time: it does no locking.
    """

    def __init__(self, path: str, attributes: FileAttributes, metadata, opener: BlockStreamOpener):
        """
        Args:
            path: Path the handle was opened with
            attributes: Snapshot returned by the metadata service
            metadata: Metadata service client (block layout and listings)
            opener: Callable opening a per-block stream at an intra-block offset
        """
        self._path = path
        self._info = attributes
        self._offset = 0
        self._resolver = BlockLocationResolver(metadata, path, attributes.size)
        self._blocks = BlockStreamMultiplexer(self._resolver, opener, attributes.size)
        self._cursor = DirectoryCursor(metadata, path)
        self.closed = False

    @classmethod
    def open(cls, metadata, opener: BlockStreamOpener, path: str) -> 'FileHandle':
        """
        Fetch the attributes of path and return a handle on it.

        Nothing else is fetched until the handle is first read or listed.

        Raises:
            PathNotFoundError: If path does not exist
            PermissionDeniedError: If path is not accessible
        """
        attributes = metadata.get_file_info(path)
        logger.debug(f"Opened {path} (size={attributes.size}, is_dir={attributes.is_dir})")
        return cls(path, attributes, metadata, opener)

    @property
    def name(self) -> str:
        return self._path

    @property
    def size(self) -> int:
        return self._info.size

    @property
    def is_dir(self) -> bool:
        return self._info.is_dir

    @property
    def state(self) -> ReaderState:
        return self._blocks.state

    def stat(self) -> FileAttributes:
        return self._info

    def tell(self) -> int:
        return self._offset

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """
        Move the read position. Never performs I/O.

        Args:
            offset: Byte offset, interpreted according to whence
            whence: os.SEEK_SET, os.SEEK_CUR or os.SEEK_END

        Returns:
            The new offset

        Raises:
            InvalidArgumentError: If whence is unknown or the target is outside [0, size]
        """
        if whence == os.SEEK_SET:
            target = offset
        elif whence == os.SEEK_CUR:
            target = self._offset + offset
        elif whence == os.SEEK_END:
            target = self._info.size + offset
        else:
            raise InvalidArgumentError(f"invalid whence: {whence}")

        if target < 0 or target > self._info.size:
            raise InvalidArgumentError(f"invalid resulting offset: {target}")

        self._offset = target
        self._blocks.discard()
        return self._offset

    def readinto(self, buffer) -> int:
        """
        Read up to len(buffer) bytes at the current offset.

        A single call never continues past the end of a block, so short
        reads are normal.

        Returns:
            Number of bytes read

        Raises:
            EndOfFileError: If the offset is at the end of the file
        """
        n = self._blocks.read_into(buffer, self._offset)
        self._offset += n
        return n

    def read(self, size: int) -> bytes:
        """Read up to size bytes at the current offset; same contract as readinto."""
        if size < 0:
            raise InvalidArgumentError(f"invalid read size: {size}")
        buffer = bytearray(size)
        n = self.readinto(buffer)
        return bytes(buffer[:n])

    def read_at(self, buffer, offset: int) -> int:
        """Seek to offset, then perform one readinto. Moves the handle's offset."""
        self.seek(offset, os.SEEK_SET)
        return self.readinto(buffer)

    def readdir(self, n: int = 0) -> List[FileAttributes]:
        """
        List directory entries.

        Args:
            n: If > 0, return at most n entries after those already returned;
               otherwise restart and return the whole listing

        Raises:
            InvalidArgumentError: If the handle is not a directory
            EndOfFileError: If n > 0 and the listing is exhausted
            ListingIncompleteError: If an unbounded listing fails part-way
        """
        if not self._info.is_dir:
            raise InvalidArgumentError(f"{self._path} is not a directory")
        return self._cursor.get_page(n)

    def readdirnames(self, n: int = 0) -> List[str]:
        """Like readdir, but returns entry names only."""
        try:
            entries = self.readdir(n)
        except ListingIncompleteError as e:
            names = [entry.name for entry in e.entries]
            raise ListingIncompleteError(str(e), names) from e.__cause__
        return [entry.name for entry in entries]

    def close(self) -> None:
        """
        No-op for the remote side. Releases a locally open block stream.
        """
        self._blocks.discard()
        self.closed = True

    def chmod(self, mode: int) -> None:
        """No-op: the handle is read-only."""

    def chown(self, uid: int, gid: int) -> None:
        """No-op: the handle is read-only."""

    def __enter__(self) -> 'FileHandle':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"FileHandle(path={self._path!r}, offset={self._offset}, size={self._info.size})"
