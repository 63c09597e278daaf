"""Exception classes raised by the read-only filesystem client."""

from typing import List, Optional


class DFSException(Exception):
    """
    Base exception class for all client errors.
    """
    pass


class PathNotFoundError(DFSException):
    """
    Raised when the metadata service reports that a path does not exist.
    """
    pass


class PermissionDeniedError(DFSException):
    """
    Raised when the metadata service refuses access to a path.
    """
    pass


class InvalidArgumentError(DFSException, ValueError):
    """
    Raised for an unsupported seek mode, a seek target outside the file,
    or a directory operation on a plain file.
    """
    pass


class TransportError(DFSException):
    """
    Raised when a collaborator call fails. Never retried by the client.
    """
    pass


class MetadataServiceError(TransportError):
    """
    Raised when the metadata service is unreachable or returns an unusable response.
    """
    pass


class BlockReadError(TransportError):
    """
    Raised when a block stream cannot be opened or fails mid-read.
    """
    pass


class MetadataInconsistencyError(DFSException):
    """
    Raised when the cached block layout does not cover an offset inside the file.
    """
    pass


class EndOfFileError(DFSException, EOFError):
    """
    Raised at true end of file, or for an empty page of a bounded directory listing.
    """
    pass


class ListingIncompleteError(DFSException):
    """
    Raised when a directory listing fails part-way.

    The entries fetched before the failure are kept in ``entries``; the
    original error is chained as ``__cause__``.
    """

    def __init__(self, message: str, entries: Optional[List] = None):
        super().__init__(message)
        self.entries = list(entries or [])
