"""Archive references and the sequential entry enumerator used by the collector."""

import abc
import os
import zipfile
from pathlib import Path
from typing import Iterator, NamedTuple


class ArchiveOpenError(Exception):
    """Raised when an archive cannot be opened or its directory cannot be read.

    The exception is picklable so it can be re-raised in the parent process
    after a worker scan fails.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"cannot read archive {self.path}: {self.reason}"


class ArchiveRef:
    """An input archive: its filesystem path and the short label used in reports.

    The label is computed once and the same string object is handed to every
    observation recorded for this archive.
    """

    __slots__ = ('_path', '_label')

    def __init__(self, path: str | os.PathLike, label: str | None = None):
        self._path = Path(path)
        self._label = label if label is not None else self._path.name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def label(self) -> str:
        return self._label

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArchiveRef):
            return False
        return self._path == other._path and self._label == other._label

    def __hash__(self) -> int:
        return hash((self._path, self._label))

    def __repr__(self) -> str:
        return f"ArchiveRef({str(self._path)!r}, label={self._label!r})"


class ArchiveEntry(NamedTuple):
    """Metadata of one archive entry, as found in the archive directory.

    Attributes:
        name: Entry name inside the archive (slash separated)
        size: Uncompressed size in bytes
        crc32: CRC-32 of the uncompressed content
    """
    name: str
    size: int
    crc32: int


class ArchiveReader(abc.ABC):
    """Sequential enumerator over the entries of one archive.

    Readers are scoped resources: use them as context managers so the
    underlying handle is released as soon as enumeration finishes or fails.
    """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @abc.abstractmethod
    def entries(self) -> Iterator[ArchiveEntry]:
        """Yield entries in archive-native order."""

    @abc.abstractmethod
    def close(self):
        """Release the archive handle."""


class ZipArchiveReader(ArchiveReader):
    """ArchiveReader for zip-based archives (jar, war, zip).

    Size and CRC are taken from the central directory, so no entry is ever
    decompressed.
    """

    def __init__(self, path: str | os.PathLike):
        """Open the archive at path.

        Args:
            path: Filesystem path of the archive

        Raises:
            ArchiveOpenError: The path does not exist, is not a regular file, or
                is not a readable zip archive
        """
        self._path = str(path)
        try:
            self._zip = zipfile.ZipFile(self._path, 'r')
        except FileNotFoundError:
            raise ArchiveOpenError(self._path, "no such file") from None
        except IsADirectoryError:
            raise ArchiveOpenError(self._path, "is a directory") from None
        except zipfile.BadZipFile as e:
            raise ArchiveOpenError(self._path, f"not a valid archive ({e})") from None
        except OSError as e:
            raise ArchiveOpenError(self._path, e.strerror or str(e)) from None

    def entries(self) -> Iterator[ArchiveEntry]:
        for info in self._zip.infolist():
            yield ArchiveEntry(info.filename, info.file_size, info.CRC)

    def close(self):
        if self._zip is not None:
            self._zip.close()
            self._zip = None
