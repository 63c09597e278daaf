"""Project-wide constants (ports, timeouts, RPC method names)."""

DEFAULT_METADATA_HOST: str = "namenode"
DEFAULT_METADATA_PORT: int = 8020
METADATA_TIMEOUT_SECONDS: int = 30
METADATA_RPC_PREFIX: str = "/rpc"

GET_FILE_INFO_METHOD: str = "getFileInfo"
GET_BLOCK_LOCATIONS_METHOD: str = "getBlockLocations"
GET_LISTING_METHOD: str = "getListing"

DATANODE_READ_BLOCK_METHOD: str = "/datanode.DatanodeService/ReadBlock"
BLOCK_READ_TIMEOUT_SECONDS: int = 60
GRPC_KEEPALIVE_TIME_MS: int = 30000
GRPC_KEEPALIVE_TIMEOUT_MS: int = 10000

LISTING_PAGE_SIZE: int = 1000
READ_CHUNK_SIZE_BYTES: int = 64 * 1024
