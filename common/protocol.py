"""Block streaming RPC message definitions (serialization formats)."""

from dataclasses import dataclass
from typing import Optional
import json
import base64


@dataclass
class ReadBlockRequest:
    """Request message for ReadBlock RPC."""
    block_id: str
    offset: int
    length: int
    generation_stamp: int = 0

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        return json.dumps(self.__dict__).encode('utf-8')


@dataclass
class BlockReadMetadata:
    """Header sent as the first message of a ReadBlock stream."""
    block_id: str
    offset: int
    length: int


@dataclass
class BlockDataPiece:
    """A piece of block data for streaming."""
    data: bytes


@dataclass
class ReadBlockResponse:
    """Response message for ReadBlock RPC (streaming)."""
    metadata: Optional[BlockReadMetadata] = None
    data: Optional[BlockDataPiece] = None

    def to_json(self) -> bytes:
        """Serialize to JSON bytes."""
        obj = {}
        if self.metadata:
            obj['metadata'] = self.metadata.__dict__
        if self.data:
            obj['data'] = base64.b64encode(self.data.data).decode('ascii')
        return json.dumps(obj).encode('utf-8')

    @classmethod
    def from_json(cls, data: bytes) -> 'ReadBlockResponse':
        """Deserialize from JSON bytes."""
        obj = json.loads(data)
        metadata = BlockReadMetadata(**obj['metadata']) if 'metadata' in obj else None
        data_piece = BlockDataPiece(data=base64.b64decode(obj['data'])) if 'data' in obj else None
        return cls(metadata=metadata, data=data_piece)
