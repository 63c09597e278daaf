"""Block-spanning read state machine."""

from enum import Enum
from typing import Callable, Optional, Protocol

from client.block_locations import BlockLocationResolver
from client.exceptions import BlockReadError, EndOfFileError
from common.logging_config import get_logger
from common.types import BlockDescriptor

logger = get_logger(__name__)


class BlockStream(Protocol):
    def read(self, size: int) -> bytes:
        ...

    def close(self) -> None:
        ...


BlockStreamOpener = Callable[[BlockDescriptor, int], BlockStream]


class ReaderState(Enum):
    """Progress of a file reader through its block layout."""
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    STREAM_OPEN = "stream_open"
    AT_END = "at_end"


class BlockStreamMultiplexer:
    """
    Presents the blocks of one file as a single byte stream.

    At most one per-block stream is open at a time. A zero-length read with
    no error from that stream means the block is used up: the stream is
    closed and the block covering the current offset is opened in its place.
    End of file is decided only by comparing the offset with the file size,
    never by a stream's own end signal.
    """

    def __init__(self, resolver: BlockLocationResolver, opener: BlockStreamOpener, size: int):
        self._resolver = resolver
        self._opener = opener
        self._size = size
        self._stream: Optional[BlockStream] = None
        self._block: Optional[BlockDescriptor] = None
        self.state = ReaderState.UNRESOLVED

    @property
    def current_block(self) -> Optional[BlockDescriptor]:
        return self._block

    def discard(self) -> None:
        """Close the open stream, if any, without touching the layout."""
        self._close_stream()
        self.state = ReaderState.RESOLVED if self._resolver.resolved else ReaderState.UNRESOLVED

    def read_into(self, buffer, offset: int) -> int:
        """
        Read bytes at file offset into buffer.

        Returns after the first non-empty stream read, so the count may be
        smaller than the buffer even when more data follows.

        Args:
            buffer: Writable bytes-like object
            offset: Current logical offset of the caller

        Returns:
            Number of bytes written into buffer (always > 0)

        Raises:
            EndOfFileError: If offset is at or past the end of the file
            MetadataInconsistencyError: If no block covers offset
            BlockReadError: If the block streams keep ending without data
        """
        if offset >= self._size:
            self._enter_end()
            raise EndOfFileError(f"end of file at offset {offset}")

        view = memoryview(buffer).cast('B')
        if len(view) == 0:
            return 0

        if self.state is ReaderState.UNRESOLVED:
            self._resolver.resolve()
            self.state = ReaderState.RESOLVED

        if self._stream is None:
            self._open_stream(offset)

        # a block reported longer than the file must not carry the offset past size
        want = min(len(view), self._size - offset)

        # the open stream may belong to a block that ends exactly at offset
        for _ in range(self._resolver.blocks_remaining(offset) + 1):
            try:
                data = self._stream.read(want)
            except Exception as e:
                logger.warning(f"Discarding stream for block {self._block.block_id} after error: {e}")
                self.discard()
                raise

            n = min(len(data), want)
            if n > 0:
                view[:n] = data[:n]
                if offset + n >= self._size:
                    self._enter_end()
                return n

            logger.debug(f"Block {self._block.block_id} exhausted at offset {offset}")
            self.discard()
            self._open_stream(offset)

        self.discard()
        raise BlockReadError(f"block streams returned no data at offset {offset}")

    def _open_stream(self, offset: int) -> None:
        block = self._resolver.find_block(offset)
        self._stream = self._opener(block, offset - block.offset)
        self._block = block
        self.state = ReaderState.STREAM_OPEN
        logger.debug(f"Opened block {block.block_id} at intra-block offset {offset - block.offset}")

    def _close_stream(self) -> None:
        if self._stream is not None:
            stream, self._stream = self._stream, None
            self._block = None
            stream.close()

    def _enter_end(self) -> None:
        self._close_stream()
        self.state = ReaderState.AT_END
