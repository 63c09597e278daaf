"""Shared data type definitions (FileAttributes, BlockDescriptor, DatanodeLocation)."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class DatanodeLocation:
    """
    One replica location of a block.
    """
    host: str
    port: int
    node_id: str = ""

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class BlockDescriptor:
    """
    Placement record of a single block: its byte range in the file and where it lives.
    """
    block_id: str
    offset: int
    length: int
    locations: Tuple[DatanodeLocation, ...] = field(default_factory=tuple)
    generation_stamp: int = 0

    @property
    def end(self) -> int:
        return self.offset + self.length

    def covers(self, position: int) -> bool:
        """Whether the half-open range [offset, offset+length) contains position."""
        return self.offset <= position < self.end


@dataclass(frozen=True)
class FileAttributes:
    """
    Attributes of a file or directory entry as reported by the metadata service.
    """
    name: str
    size: int
    is_dir: bool
    permission: int = 0o644
    owner: str = ""
    group: str = ""
    modification_time: int = 0
    access_time: int = 0
    replication: int = 0
    block_size: int = 0
