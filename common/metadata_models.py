"""Pydantic models for metadata service RPC requests and responses."""

from typing import List, Optional
from pydantic import BaseModel

from common.types import BlockDescriptor, DatanodeLocation, FileAttributes


class DatanodeInfoModel(BaseModel):
    """Replica location as sent on the wire."""
    host: str
    port: int
    node_id: str = ""


class FileStatusModel(BaseModel):
    """File or directory status record."""
    path: str
    length: int = 0
    is_dir: bool = False
    permission: int = 0o644
    owner: str = ""
    group: str = ""
    modification_time: int = 0
    access_time: int = 0
    replication: int = 0
    block_size: int = 0

    def to_attributes(self) -> FileAttributes:
        return FileAttributes(
            name=self.path,
            size=self.length,
            is_dir=self.is_dir,
            permission=self.permission,
            owner=self.owner,
            group=self.group,
            modification_time=self.modification_time,
            access_time=self.access_time,
            replication=self.replication,
            block_size=self.block_size,
        )


class LocatedBlockModel(BaseModel):
    """A block together with its byte offset in the file and its replicas."""
    block_id: str
    offset: int
    num_bytes: int
    generation_stamp: int = 0
    locations: List[DatanodeInfoModel] = []

    def to_descriptor(self) -> BlockDescriptor:
        return BlockDescriptor(
            block_id=self.block_id,
            offset=self.offset,
            length=self.num_bytes,
            locations=tuple(
                DatanodeLocation(host=loc.host, port=loc.port, node_id=loc.node_id)
                for loc in self.locations
            ),
            generation_stamp=self.generation_stamp,
        )


class LocatedBlocksModel(BaseModel):
    """Ordered block layout of a file."""
    file_length: int
    blocks: List[LocatedBlockModel] = []


class GetFileInfoRequest(BaseModel):
    """Request model for getFileInfo."""
    src: str


class GetFileInfoResponse(BaseModel):
    """Response model for getFileInfo. fs is null when the path does not exist."""
    fs: Optional[FileStatusModel] = None


class GetBlockLocationsRequest(BaseModel):
    """Request model for getBlockLocations."""
    src: str
    offset: int
    length: int


class GetBlockLocationsResponse(BaseModel):
    """Response model for getBlockLocations."""
    locations: Optional[LocatedBlocksModel] = None


class GetListingRequest(BaseModel):
    """Request model for getListing. start_after is exclusive; limit <= 0 lets the server pick."""
    src: str
    start_after: str = ""
    limit: int = 0


class DirectoryListingModel(BaseModel):
    """One server page of directory entries."""
    partial_listing: List[FileStatusModel] = []
    remaining_entries: int = 0


class GetListingResponse(BaseModel):
    """Response model for getListing. dir_list is null when the path does not exist."""
    dir_list: Optional[DirectoryListingModel] = None


class ErrorResponse(BaseModel):
    """Error body returned with non-2xx status codes."""
    detail: str
    code: str = "UNKNOWN"
