"""io.RawIOBase adapter so standard library consumers can read a FileHandle."""

import io
import os

from client.exceptions import EndOfFileError
from client.file_handle import FileHandle


class RawBlockFile(io.RawIOBase):
    """
    Raw binary stream over a FileHandle.

    Follows the io conventions instead of the handle's: end of file is a
    zero-length read rather than an exception. Wrap in io.BufferedReader for
    read-all and line iteration.
    """

    def __init__(self, handle: FileHandle):
        super().__init__()
        self._handle = handle

    @property
    def name(self) -> str:
        return self._handle.name

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        try:
            return self._handle.readinto(buffer)
        except EndOfFileError:
            return 0

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._handle.seek(offset, whence)

    def tell(self) -> int:
        return self._handle.tell()

    def close(self) -> None:
        if not self.closed:
            self._handle.close()
        super().close()
