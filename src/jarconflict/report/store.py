"""Saved conflict reports.

A report file is a single msgpack document:
    [manifest_dict, [record_bytes, ...]]
where each record_bytes is ConflictRecord.to_msgpack().
"""

import datetime
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import msgpack

from ..scan.policy import DistinctnessPolicy
from .conflict import ConflictRecord

REPORT_FORMAT_VERSION = "1.0"


class ReportFormatError(Exception):
    """Raised when a saved report cannot be read."""


@dataclass
class ReportManifest:
    """Describes the run that produced a saved report."""
    version: str = REPORT_FORMAT_VERSION
    """Report format version"""

    timestamp: str = ""
    """ISO format timestamp of the scan"""

    policy: str = "size"
    """Distinctness policy value (size, crc or none)"""

    archives: list[str] = field(default_factory=list)
    """Scanned archive paths in classpath order"""

    exclusions: list[str] = field(default_factory=list)
    """Entry name prefixes that were ignored"""

    @staticmethod
    def now() -> str:
        return datetime.datetime.now(datetime.UTC).isoformat()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportManifest":
        return cls(**data)


class ReportFile:
    """Reads and writes saved reports."""

    @staticmethod
    def write(path: str | os.PathLike, manifest: ReportManifest, records: list[ConflictRecord]) -> None:
        data = msgpack.dumps([manifest.to_dict(), [record.to_msgpack() for record in records]])
        Path(path).write_bytes(data)

    @staticmethod
    def read(path: str | os.PathLike) -> tuple[ReportManifest, list[ConflictRecord]]:
        """Load a saved report.

        Returns:
            (manifest, records) with records in their saved order

        Raises:
            ReportFormatError: The file is missing or unreadable, is not a report,
                or has an unsupported format version or check policy
        """
        try:
            data = Path(path).read_bytes()
        except FileNotFoundError:
            raise ReportFormatError(f"Report not found: {path}") from None
        except OSError as e:
            raise ReportFormatError(f"Cannot read report {path}: {e.strerror or e}") from None

        try:
            manifest_data, record_data = msgpack.loads(data)
            manifest = ReportManifest.from_dict(manifest_data)
        except (ValueError, TypeError, msgpack.exceptions.UnpackException) as e:
            raise ReportFormatError(f"Not a conflict report: {path} ({e})") from None

        if manifest.version != REPORT_FORMAT_VERSION:
            raise ReportFormatError(f"Unsupported report version {manifest.version!r} in {path}")

        if manifest.policy not in [p.value for p in DistinctnessPolicy]:
            raise ReportFormatError(f"Unknown check policy {manifest.policy!r} in report {path}")

        try:
            records = [ConflictRecord.from_msgpack(item) for item in record_data]
        except (ValueError, TypeError, IndexError, AssertionError, msgpack.exceptions.UnpackException) as e:
            raise ReportFormatError(f"Corrupt record in report {path} ({e})") from None

        return manifest, records
