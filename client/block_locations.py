"""Block layout lookup for one open file."""

from typing import List, Optional, Protocol

from client.exceptions import MetadataInconsistencyError
from common.logging_config import get_logger
from common.types import BlockDescriptor

logger = get_logger(__name__)


class BlockLocationSource(Protocol):
    def get_block_locations(self, path: str, offset: int, length: int) -> List[BlockDescriptor]:
        ...


class BlockLocationResolver:
    """
    Fetches a file's block layout once and maps file offsets to blocks.

    The layout is a snapshot: it is requested at most once, for [0, size),
    and never refreshed for the lifetime of the resolver.
    """

    def __init__(self, metadata: BlockLocationSource, path: str, size: int):
        self._metadata = metadata
        self._path = path
        self._size = size
        self._blocks: Optional[List[BlockDescriptor]] = None

    @property
    def resolved(self) -> bool:
        return self._blocks is not None

    @property
    def blocks(self) -> List[BlockDescriptor]:
        if self._blocks is None:
            raise RuntimeError("block layout has not been resolved")
        return list(self._blocks)

    def resolve(self) -> None:
        """
        Request the block layout from the metadata service.

        Errors from the metadata service propagate unchanged and leave the
        resolver unresolved.
        """
        if self._blocks is not None:
            return

        blocks = self._metadata.get_block_locations(self._path, 0, self._size)
        self._blocks = list(blocks)
        logger.debug(f"Resolved {len(self._blocks)} blocks for {self._path} (size={self._size})")

    def find_block(self, offset: int) -> BlockDescriptor:
        """
        Return the first block whose range contains offset.

        Raises:
            MetadataInconsistencyError: If no block covers offset
        """
        for block in self.blocks:
            if block.covers(offset):
                return block

        logger.error(f"No block covers offset {offset} of {self._path}")
        raise MetadataInconsistencyError(f"no block covers offset {offset} of {self._path}")

    def blocks_remaining(self, offset: int) -> int:
        """Number of blocks that end after offset."""
        return sum(1 for block in self.blocks if block.end > offset)
