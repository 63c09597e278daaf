"""Entry point of the read-only filesystem client."""

import io
from typing import List, Optional

from client.block_reader import GrpcBlockStreamOpener
from client.block_stream import BlockStreamOpener
from client.config import Config
from client.file_handle import FileHandle
from client.file_io import RawBlockFile
from client.metadata_client import MetadataClient
from common.constants import READ_CHUNK_SIZE_BYTES
from common.logging_config import get_logger
from common.types import FileAttributes

logger = get_logger(__name__)


class DFSClient:
    """
    Opens read-only handles on paths of the distributed filesystem.

    The metadata client and the block stream opener are passed in; use
    from_config() to build the default HTTP and gRPC transports.
    """

    def __init__(self, metadata: MetadataClient, opener: BlockStreamOpener,
                 read_chunk_size: int = READ_CHUNK_SIZE_BYTES):
        self.metadata = metadata
        self.opener = opener
        self.read_chunk_size = read_chunk_size

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> 'DFSClient':
        """
        Build a client with the HTTP metadata transport and gRPC block reader.

        Args:
            config: Configuration instance (defaults to ~/.redcloud/reader.json)
        """
        config = config or Config()
        return cls(
            MetadataClient(config),
            GrpcBlockStreamOpener(config),
            read_chunk_size=config.get_read_chunk_size(),
        )

    def open(self, path: str) -> FileHandle:
        """Open path for reading. Raises PathNotFoundError / PermissionDeniedError."""
        return FileHandle.open(self.metadata, self.opener, path)

    def open_stream(self, path: str, buffer_size: Optional[int] = None) -> io.BufferedReader:
        """Open path as a buffered binary file object."""
        return io.BufferedReader(RawBlockFile(self.open(path)), buffer_size=buffer_size or self.read_chunk_size)

    def stat(self, path: str) -> FileAttributes:
        return self.metadata.get_file_info(path)

    def list_dir(self, path: str) -> List[FileAttributes]:
        """Return every entry of a directory."""
        with self.open(path) as handle:
            return handle.readdir(0)

    def read_file(self, path: str) -> bytes:
        """Return the whole content of a file."""
        with self.open_stream(path) as stream:
            return stream.read()

    def close(self) -> None:
        self.metadata.close()
