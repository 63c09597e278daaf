"""Read-only client for the block-replicated filesystem."""

from client.config import Config
from client.dfs_client import DFSClient
from client.file_handle import FileHandle
from client.file_io import RawBlockFile

__all__ = [
    "Config",
    "DFSClient",
    "FileHandle",
    "RawBlockFile",
]
