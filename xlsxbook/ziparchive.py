"""Reading and writing the zip container of a spreadsheet package."""

from __future__ import annotations

import os
import zipfile
from typing import BinaryIO, Union

Source = Union[str, "os.PathLike[str]", BinaryIO]


class ZipReader:
    """Read-only access to the files of a zip archive.

    An archive that cannot be opened is not an error here: :meth:`exists`
    returns False and the archive appears empty.
    """

    def __init__(self, source: Source) -> None:
        try:
            self._zip: zipfile.ZipFile | None = zipfile.ZipFile(source, "r")
        except (zipfile.BadZipFile, OSError):
            self._zip = None
        self._file_paths = (
            [info.filename for info in self._zip.infolist() if not info.is_dir()]
            if self._zip is not None
            else []
        )

    def exists(self) -> bool:
        """Whether the archive was opened successfully."""
        return self._zip is not None

    def file_paths(self) -> list[str]:
        """Paths of the regular files in the archive, in archive order."""
        return list(self._file_paths)

    def file_data(self, file_name: str) -> bytes:
        """The contents of *file_name*; raises KeyError if it is not present."""
        if self._zip is None or file_name not in self._file_paths:
            raise KeyError(file_name)
        return self._zip.read(file_name)

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def __enter__(self) -> ZipReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ZipWriter:
    """Writes files into a new deflate-compressed zip archive."""

    def __init__(self, target: Source) -> None:
        self._error = False
        try:
            self._zip: zipfile.ZipFile | None = zipfile.ZipFile(
                target, "w", compression=zipfile.ZIP_DEFLATED
            )
        except OSError:
            self._zip = None
            self._error = True

    def add_file(self, file_path: str, data: bytes | BinaryIO) -> None:
        """Store *data* (bytes or a readable binary stream) as *file_path*."""
        if self._zip is None:
            self._error = True
            return
        payload = data if isinstance(data, (bytes, bytearray)) else data.read()
        try:
            self._zip.writestr(file_path, bytes(payload))
        except (OSError, ValueError):
            self._error = True

    def error(self) -> bool:
        """Whether opening the archive or any write failed."""
        return self._error

    def close(self) -> None:
        if self._zip is not None:
            try:
                self._zip.close()
            except OSError:
                self._error = True
            self._zip = None

    def __enter__(self) -> ZipWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()