"""Local file storage: whole-file helpers, byte streams and directory handling."""

from __future__ import annotations

import enum
import logging
import os
import shutil
from typing import BinaryIO, Optional, Union

from meshkit.bytes import Bytes

log = logging.getLogger(__name__)

EOF = -1

StreamData = Union[Bytes, bytes, bytearray, memoryview, str, int]


class FileMode(enum.Enum):
    """How a file stream is opened."""

    READ = "rb"
    WRITE = "wb"
    APPEND = "ab"


class FileStream:
    """A byte stream over an open file that tracks how much can still be read."""

    def __init__(self, file: BinaryIO) -> None:
        self._file = file
        self._closed = False
        self._available = self.size()

    def __enter__(self) -> "FileStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        """Whether the stream has been closed."""
        return self._closed

    def name(self) -> Optional[str]:
        """The path the file was opened with, if known."""
        name = getattr(self._file, "name", None)
        return name if isinstance(name, str) else None

    def size(self) -> int:
        """Current size of the underlying file in bytes."""
        return os.fstat(self._file.fileno()).st_size

    def close(self) -> None:
        """Close the stream; closing twice does nothing."""
        if not self._closed:
            self._closed = True
            self._file.close()

    def write(self, data: StreamData) -> int:
        """Write a single byte value or a run of bytes; return the count written."""
        if isinstance(data, int):
            if not 0 <= data <= 0xFF:
                raise ValueError("byte value must be in range 0..255")
            payload = bytes((data,))
        else:
            payload = bytes(Bytes(data))
        wrote = self._file.write(payload) or 0
        self._available += wrote
        return wrote

    def available(self) -> int:
        """Number of bytes still known to be readable."""
        return self._available

    def read(self) -> int:
        """Read one byte and return its value, or -1 at the end."""
        if self._available <= 0:
            return EOF
        chunk = self._file.read(1)
        if not chunk:
            return EOF
        self._available -= 1
        return chunk[0]

    def peek(self) -> int:
        """Return the next byte value without consuming it, or -1 at the end."""
        if self._available <= 0:
            return EOF
        position = self._file.tell()
        chunk = self._file.read(1)
        self._file.seek(position)
        return chunk[0] if chunk else EOF

    def read_bytes(self, size: int) -> Bytes:
        """Read up to ``size`` bytes."""
        if size < 0:
            raise ValueError("size must not be negative")
        wanted = min(size, max(self._available, 0))
        chunk = self._file.read(wanted) if wanted else b""
        self._available -= len(chunk)
        return Bytes(chunk)

    def flush(self) -> None:
        """Push buffered writes to the file."""
        self._file.flush()


class FileSystem:
    """File operations on the local disk; paths are used as given."""

    def init(self) -> bool:
        """Prepare the file system for use."""
        log.debug("FileSystem initializing...")
        return True

    @staticmethod
    def list_dir(directory: str) -> list[str]:
        """Describe the entries of ``directory`` as ``DIR: name`` or ``FILE: name`` lines."""
        try:
            with os.scandir(directory) as entries:
                lines = [
                    f"{'DIR' if entry.is_dir() else 'FILE'}: {entry.name}"
                    for entry in sorted(entries, key=lambda e: e.name)
                ]
        except OSError:
            log.error("list_dir: failed to open directory %s", directory)
            return []
        for line in lines:
            log.debug("  %s", line)
        return lines

    def file_exists(self, file_path: str) -> bool:
        """Whether ``file_path`` can be opened for reading."""
        try:
            with open(file_path, "rb"):
                return True
        except OSError:
            log.error("file_exists: failed to open file %s", file_path)
            return False

    def read_file(self, file_path: str) -> Bytes:
        """Return the whole content of a file; empty if it cannot be read."""
        try:
            with open(file_path, "rb") as file:
                expected = os.fstat(file.fileno()).st_size
                content = file.read()
        except OSError:
            log.error("read_file: failed to open input file %s", file_path)
            return Bytes()
        log.debug("read_file: read %d bytes from file %s", len(content), file_path)
        if len(content) != expected:
            log.error("read_file: failed to read file %s", file_path)
            return Bytes()
        return Bytes(content)

    def write_file(self, file_path: str, data: Union[Bytes, bytes, bytearray, str]) -> int:
        """Replace a file with ``data``; return the number of bytes written."""
        self.remove_file(file_path)
        payload = bytes(Bytes(data))
        try:
            with open(file_path, "wb") as file:
                wrote = file.write(payload)
        except OSError:
            log.error("write_file: failed to open output file %s", file_path)
            return 0
        log.debug("write_file: wrote %d bytes to file %s", wrote, file_path)
        if wrote < len(payload):
            log.warning("write_file: not all data was written to file %s", file_path)
        return wrote

    def open_file(self, file_path: str, mode: FileMode) -> Optional[FileStream]:
        """Open a stream on ``file_path``; ``None`` if the file cannot be opened."""
        if not isinstance(mode, FileMode):
            raise ValueError(f"unsupported file mode {mode!r}")
        log.debug("open_file: opening file %s in mode %s", file_path, mode.value)
        try:
            file = open(file_path, mode.value)
        except OSError:
            log.error("open_file: failed to open file %s", file_path)
            return None
        return FileStream(file)

    def remove_file(self, file_path: str) -> bool:
        """Delete a file; return whether it was removed."""
        try:
            os.remove(file_path)
        except OSError:
            return False
        return True

    def rename_file(self, from_path: str, to_path: str) -> bool:
        """Move a file, replacing any existing target; return whether it worked."""
        try:
            os.replace(from_path, to_path)
        except OSError:
            return False
        return True

    def directory_exists(self, directory_path: str) -> bool:
        """Whether ``directory_path`` names an existing directory."""
        return os.path.isdir(directory_path)

    def create_directory(self, directory_path: str) -> bool:
        """Create a directory unless something already exists at that path."""
        if os.path.exists(directory_path):
            return True
        try:
            os.mkdir(directory_path, 0o700)
        except OSError:
            log.error("create_directory: failed to create directory %s", directory_path)
            return False
        return True

    def remove_directory(self, directory_path: str) -> bool:
        """Remove an empty directory; return whether it was removed."""
        try:
            os.rmdir(directory_path)
        except OSError:
            log.error("remove_directory: failed to remove directory %s", directory_path)
            return False
        return True

    def list_directory(self, directory_path: str) -> list[str]:
        """Names of the plain files in ``directory_path``, sorted."""
        try:
            with os.scandir(directory_path) as entries:
                return sorted(entry.name for entry in entries if not entry.is_dir())
        except OSError:
            log.error("list_directory: failed to open directory %s", directory_path)
            return []

    def storage_size(self) -> int:
        """Total bytes of the storage holding the working directory."""
        return shutil.disk_usage(os.getcwd()).total

    def storage_available(self) -> int:
        """Free bytes on the storage holding the working directory."""
        return shutil.disk_usage(os.getcwd()).free