import logging
import os
from typing import Iterable, Sequence

from .archive import ArchiveRef
from .report.conflict import ConflictRecord, report
from .report.store import ReportFile, ReportManifest
from .scan.collector import collect, collect_parallel
from .scan.conflict_index import ConflictIndex
from .scan.entry_filter import EntryFilter
from .scan.policy import DistinctnessPolicy
from .settings import ConfigurationError
from .utils.processor import Processor

logger = logging.getLogger(__name__)

MINIMUM_ARCHIVES = 2


class Classpath:
    """Workflow layer for checking an ordered set of archives for duplicate classes.

    Classpath validates the run configuration, drives the collector (in-process,
    or through a Processor's worker pool) and selects the conflicts from the
    resulting index. The index is built once and reused by later calls.

    Example:
        classpath = Classpath(['lib/a.jar', 'lib/b.jar'], policy=DistinctnessPolicy.CRC)
        for record in classpath.conflicts():
            print(record.name, record.buckets)
    """

    def __init__(self, paths: Sequence[str | os.PathLike], *,
                 policy: DistinctnessPolicy | str = DistinctnessPolicy.SIZE,
                 exclusions: Iterable[str] = (),
                 processor: Processor | None = None):
        """Validate the configuration without touching any archive.

        Args:
            paths: Archive paths in classpath order
            policy: Distinctness policy or its selector string
            exclusions: Entry name prefixes to ignore
            processor: Worker pool for parallel scanning, or None to scan in-process

        Raises:
            ConfigurationError: Fewer than two archives, an archive path without a
                file name, or an unknown policy
        """
        if len(paths) < MINIMUM_ARCHIVES:
            raise ConfigurationError(
                f"Only have {len(paths)} jar file(s). At least {MINIMUM_ARCHIVES} are needed to detect conflicts.")

        archives = []
        for path in paths:
            archive = ArchiveRef(path)
            if not archive.label or archive.label in ('.', '..'):
                raise ConfigurationError(f"Not a valid archive path: {str(path)!r}")
            archives.append(archive)

        self._archives: list[ArchiveRef] = archives
        self._policy = DistinctnessPolicy.parse(policy)
        self._entry_filter = EntryFilter(exclusions)
        self._processor = processor
        self._index: ConflictIndex | None = None

    @property
    def archives(self) -> list[ArchiveRef]:
        return list(self._archives)

    @property
    def policy(self) -> DistinctnessPolicy:
        return self._policy

    @property
    def exclusions(self) -> tuple[str, ...]:
        return self._entry_filter.exclusions

    @property
    def processor(self) -> Processor | None:
        """Worker pool used by the next scan; None scans in-process."""
        return self._processor

    @processor.setter
    def processor(self, processor: Processor | None):
        self._processor = processor

    def scan(self) -> ConflictIndex:
        """Build (or return the already built) index of class entries.

        Raises:
            ArchiveOpenError: An archive is missing or corrupt
        """
        if self._index is None:
            logger.info(f"Scanning {len(self._archives)} archives (check={self._policy}, "
                        f"exclusions={list(self.exclusions)})")
            if self._processor is None:
                self._index = collect(self._archives, self.exclusions, self._policy)
            else:
                self._index = collect_parallel(self._processor, self._archives, self.exclusions, self._policy)
        return self._index

    def conflicts(self) -> list[ConflictRecord]:
        """Conflicting class entries in lexical name order.

        Raises:
            ArchiveOpenError: An archive is missing or corrupt
        """
        records = report(self.scan(), self._policy)
        logger.info(f"Found {len(records)} conflicting class entries")
        return records

    def manifest(self) -> ReportManifest:
        return ReportManifest(
            timestamp=ReportManifest.now(),
            policy=self._policy.value,
            archives=[str(archive.path) for archive in self._archives],
            exclusions=list(self.exclusions),
        )

    def save(self, path: str | os.PathLike, records: list[ConflictRecord] | None = None) -> None:
        """Write the conflicts to a report file readable by ReportFile.read()."""
        if records is None:
            records = self.conflicts()
        ReportFile.write(path, self.manifest(), records)
        logger.info(f"Saved report with {len(records)} entries to {path}")
