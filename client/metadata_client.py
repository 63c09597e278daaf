"""HTTP client for the metadata service RPC endpoints."""

import posixpath
import uuid
from dataclasses import replace
from typing import List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from client.config import Config
from client.exceptions import (
    DFSException,
    ListingIncompleteError,
    MetadataServiceError,
    PathNotFoundError,
    PermissionDeniedError,
)
from common.constants import (
    GET_BLOCK_LOCATIONS_METHOD,
    GET_FILE_INFO_METHOD,
    GET_LISTING_METHOD,
    METADATA_RPC_PREFIX,
)
from common.logging_config import get_logger, request_context
from common.metadata_models import (
    ErrorResponse,
    GetBlockLocationsRequest,
    GetBlockLocationsResponse,
    GetFileInfoRequest,
    GetFileInfoResponse,
    GetListingRequest,
    GetListingResponse,
)
from common.types import BlockDescriptor, FileAttributes

logger = get_logger(__name__)

ResponseT = TypeVar('ResponseT', bound=BaseModel)

NOT_FOUND_CODES = {'FILE_NOT_FOUND', 'PATH_NOT_FOUND'}
PERMISSION_CODES = {'ACCESS_DENIED', 'UNAUTHORIZED_ACCESS', 'PERMISSION_DENIED'}


def relative_entry_name(directory: str, name: str) -> str:
    """Strip the directory's own path prefix from a listing entry name."""
    prefix = directory.rstrip('/') + '/'
    if name.startswith(prefix):
        return name[len(prefix):]
    return name


class MetadataClient:
    """
    JSON-over-HTTP client for the metadata service.

    Every call is a single attempt: failures are mapped to client exceptions
    and raised to the caller without retrying.
    """

    def __init__(self, config: Config, session: Optional[httpx.Client] = None):
        """
        Initialize metadata client.

        Args:
            config: Configuration instance
            session: Optional pre-built httpx client (used by tests to inject a transport)
        """
        self.config = config
        self.page_size = config.get_listing_page_size()
        self.session = session or httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        logger.info(f"Initialized MetadataClient [base_url={config.get_base_url()}]")

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def execute(self, method_name: str, request: BaseModel, response_model: Type[ResponseT]) -> ResponseT:
        """
        Invoke one metadata RPC.

        Args:
            method_name: RPC method (e.g. "getFileInfo")
            request: Request model, sent as the JSON body
            response_model: Model used to validate the JSON response

        Returns:
            Validated response model

        Raises:
            PathNotFoundError: If the service reports the path as missing
            PermissionDeniedError: If access to the path is refused
            MetadataServiceError: On network failure, unexpected status or malformed payload
        """
        endpoint = f"{METADATA_RPC_PREFIX}/{method_name}"

        with request_context(str(uuid.uuid4())) as request_id:
            logger.debug(f"Calling {method_name}")
            try:
                response = self.session.post(
                    endpoint,
                    json=request.model_dump(),
                    headers={'X-Request-ID': request_id}
                )
            except httpx.HTTPError as e:
                logger.error(f"Metadata RPC {method_name} failed: {type(e).__name__}: {e}")
                raise MetadataServiceError(f"{method_name} failed: {e}") from e

            if response.status_code >= 400:
                raise self._map_error(method_name, response)

            try:
                return response_model.model_validate(response.json())
            except ValueError as e:
                logger.error(f"Malformed {method_name} response: {e}")
                raise MetadataServiceError(f"Malformed {method_name} response: {e}") from e

    def _map_error(self, method_name: str, response: httpx.Response) -> DFSException:
        """
        Map an error response to a client exception.

        Args:
            method_name: RPC method that failed
            response: HTTP response with status >= 400

        Returns:
            Exception instance to raise
        """
        try:
            error = ErrorResponse.model_validate(response.json())
            detail, code = error.detail, error.code
        except ValueError:
            detail = response.text or 'Unknown error'
            code = 'UNKNOWN'

        message = f"{method_name}: {detail} (status={response.status_code}, code={code})"

        if code in NOT_FOUND_CODES or response.status_code == 404:
            return PathNotFoundError(message)
        if code in PERMISSION_CODES or response.status_code in (401, 403):
            return PermissionDeniedError(message)

        logger.warning(f"Metadata service error: {message}")
        return MetadataServiceError(message)

    def get_file_info(self, path: str) -> FileAttributes:
        """
        Fetch attributes of a single path.

        Args:
            path: Absolute path in the filesystem

        Returns:
            FileAttributes named after the last path component
        """
        response = self.execute(GET_FILE_INFO_METHOD, GetFileInfoRequest(src=path), GetFileInfoResponse)
        if response.fs is None:
            raise PathNotFoundError(f"{path}: no such file or directory")

        attributes = response.fs.to_attributes()
        name = posixpath.basename(path.rstrip('/')) or '/'
        return replace(attributes, name=name)

    def get_block_locations(self, path: str, offset: int, length: int) -> List[BlockDescriptor]:
        """
        Fetch the block layout covering [offset, offset + length) of a file.

        Returns:
            Block descriptors in the order returned by the service
        """
        response = self.execute(
            GET_BLOCK_LOCATIONS_METHOD,
            GetBlockLocationsRequest(src=path, offset=offset, length=length),
            GetBlockLocationsResponse
        )
        if response.locations is None:
            raise PathNotFoundError(f"{path}: no such file")

        return [block.to_descriptor() for block in response.locations.blocks]

    def get_listing(self, path: str, start_after: str = "", limit: int = 0) -> List[FileAttributes]:
        """
        List a directory, following server pages.

        Args:
            path: Directory path
            start_after: Entry name after which the listing resumes ("" = from the start)
            limit: Maximum number of entries; <= 0 fetches the whole remaining listing

        Returns:
            Entries in directory order

        Raises:
            ListingIncompleteError: If a later page fails after entries were already fetched
        """
        entries: List[FileAttributes] = []
        cursor = start_after

        while True:
            want = self.page_size if limit <= 0 else min(self.page_size, limit - len(entries))
            try:
                response = self.execute(
                    GET_LISTING_METHOD,
                    GetListingRequest(src=path, start_after=cursor, limit=want),
                    GetListingResponse
                )
                if response.dir_list is None:
                    raise PathNotFoundError(f"{path}: no such directory")
            except DFSException as e:
                if entries:
                    logger.warning(f"Listing of {path} failed after {len(entries)} entries: {e}")
                    raise ListingIncompleteError(f"Listing of {path} incomplete: {e}", entries) from e
                raise

            page = [status.to_attributes() for status in response.dir_list.partial_listing]
            entries.extend(page)
            logger.debug(
                f"Fetched listing page for {path}: {len(page)} entries, "
                f"{response.dir_list.remaining_entries} remaining"
            )

            if not page or response.dir_list.remaining_entries <= 0:
                break
            if limit > 0 and len(entries) >= limit:
                break
            cursor = relative_entry_name(path, page[-1].name)

        if limit > 0:
            return entries[:limit]
        return entries
