"""gRPC stream reading one block's bytes from a datanode replica."""

import grpc

from client.config import Config
from client.exceptions import BlockReadError
from common.constants import (
    DATANODE_READ_BLOCK_METHOD,
    GRPC_KEEPALIVE_TIME_MS,
    GRPC_KEEPALIVE_TIMEOUT_MS,
)
from common.logging_config import get_logger
from common.protocol import ReadBlockRequest, ReadBlockResponse
from common.types import BlockDescriptor

logger = get_logger(__name__)


class BlockReader:
    """
    Readable stream over a single block, starting at an intra-block offset.

    read() returns b"" once the datanode has sent the whole requested range.
    """

    def __init__(self, channel: grpc.Channel, block: BlockDescriptor, offset: int, timeout: float):
        """
        Start the ReadBlock call.

        Args:
            channel: gRPC channel to the replica, owned by the reader from now on
            block: Block to read
            offset: Offset inside the block where reading starts
            timeout: Deadline of the whole streaming call in seconds
        """
        self.block = block
        self.offset = offset
        self._channel = channel
        self._buffer = b""
        self._exhausted = False

        request = ReadBlockRequest(
            block_id=block.block_id,
            offset=offset,
            length=block.length - offset,
            generation_stamp=block.generation_stamp,
        )
        multi_callable = channel.unary_stream(
            DATANODE_READ_BLOCK_METHOD,
            request_serializer=lambda x: x,
            response_deserializer=lambda x: x,
        )
        self._call = multi_callable(request.to_json(), timeout=timeout)

    def read(self, size: int) -> bytes:
        """
        Read up to size bytes from the block.

        Raises:
            BlockReadError: If the stream fails or sends an undecodable message
        """
        while not self._buffer and not self._exhausted:
            try:
                response_bytes = next(self._call)
            except StopIteration:
                self._exhausted = True
                break
            except grpc.RpcError as e:
                logger.error(f"gRPC error reading block {self.block.block_id}: {e.code()}")
                raise BlockReadError(f"Block {self.block.block_id} read failed: {e.details()}") from e

            try:
                response = ReadBlockResponse.from_json(response_bytes)
            except (ValueError, KeyError, TypeError) as e:
                raise BlockReadError(f"Malformed ReadBlock message for block {self.block.block_id}: {e}") from e

            if response.metadata:
                logger.debug(
                    f"Reading block {self.block.block_id} from offset {response.metadata.offset}, "
                    f"length={response.metadata.length}"
                )
            if response.data:
                self._buffer = response.data.data

        data, self._buffer = self._buffer[:size], self._buffer[size:]
        return data

    def close(self) -> None:
        """Cancel the call if still running and close the channel."""
        self._call.cancel()
        self._channel.close()


class GrpcBlockStreamOpener:
    """
    Opens BlockReaders against the first replica of a block.

    There is no failover: if that replica cannot serve the block, the error
    goes to the caller.
    """

    def __init__(self, config: Config):
        self.timeout = config.get_block_read_timeout()
        self.options = [
            ('grpc.keepalive_time_ms', GRPC_KEEPALIVE_TIME_MS),
            ('grpc.keepalive_timeout_ms', GRPC_KEEPALIVE_TIMEOUT_MS),
        ]

    def __call__(self, block: BlockDescriptor, offset: int) -> BlockReader:
        if not block.locations:
            raise BlockReadError(f"Block {block.block_id} has no replica locations")

        location = block.locations[0]
        channel = grpc.insecure_channel(location.address, options=self.options)
        logger.debug(f"Opening block {block.block_id} on {location.address} at offset {offset}")

        try:
            return BlockReader(channel, block, offset, self.timeout)
        except grpc.RpcError as e:
            channel.close()
            raise BlockReadError(f"Cannot open block {block.block_id} on {location.address}: {e}") from e
