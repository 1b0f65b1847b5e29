"""Entry collection: enumerate archives and record their class entries in a ConflictIndex."""

import functools
import logging
import os
from typing import Callable, Iterable, Iterator, Sequence

from ..archive import ArchiveReader, ArchiveRef, ZipArchiveReader
from ..utils.processor import Processor
from ..utils.profiling import profile_worker
from .conflict_index import ConflictIndex
from .entry_filter import EntryFilter
from .policy import DistinctnessPolicy

logger = logging.getLogger(__name__)


def iter_observations(reader: ArchiveReader, entry_filter: EntryFilter,
                      policy: DistinctnessPolicy) -> Iterator[tuple[str, int]]:
    """Yield (name, identity) for every entry of reader accepted by entry_filter."""
    for entry in reader.entries():
        if entry_filter.accepts(entry.name):
            yield entry.name, policy.content_identity(entry)


@profile_worker
def scan_archive(path: str | os.PathLike, entry_filter: EntryFilter,
                 policy: DistinctnessPolicy) -> list[tuple[str, int]]:
    """Scan one archive and return its observations in archive order.

    Runs in worker processes, hence plain picklable arguments and results.

    Raises:
        ArchiveOpenError: The archive cannot be opened or read
    """
    with ZipArchiveReader(path) as reader:
        return list(iter_observations(reader, entry_filter, policy))


def collect(archives: Sequence[ArchiveRef], exclusions: Iterable[str], policy: DistinctnessPolicy,
            *, open_archive: Callable[[os.PathLike], ArchiveReader] = ZipArchiveReader) -> ConflictIndex:
    """Build the ConflictIndex for archives, one archive at a time in input order.

    Args:
        archives: Archives in classpath order
        exclusions: Entry name prefixes to ignore
        policy: Distinctness policy for the whole run
        open_archive: Factory returning an ArchiveReader for a path

    Returns:
        The populated index

    Raises:
        ArchiveOpenError: An archive cannot be opened or read. Nothing is
            returned in that case, even if earlier archives were scanned.
    """
    entry_filter = EntryFilter(exclusions)
    index = ConflictIndex()

    for archive in archives:
        label = archive.label
        logger.info(f"Scanning archive: {archive.path}")
        kept = 0
        with open_archive(archive.path) as reader:
            for name, identity in iter_observations(reader, entry_filter, policy):
                index.add(name, identity, label)
                kept += 1
        logger.info(f"Completed archive: {archive.path} ({kept} class entries)")

    logger.debug(f"Collected {len(index)} distinct class names from {len(archives)} archives")
    return index


def collect_parallel(processor: Processor, archives: Sequence[ArchiveRef], exclusions: Iterable[str],
                     policy: DistinctnessPolicy) -> ConflictIndex:
    """Build the same index as collect(), scanning archives in worker processes.

    Partial results are merged in input-archive order, so label lists come out
    in the same order as with a sequential scan.

    Raises:
        ArchiveOpenError: The first archive that fails to open or read
    """
    entry_filter = EntryFilter(exclusions)
    index = ConflictIndex()

    worker = functools.partial(scan_archive, entry_filter=entry_filter, policy=policy)
    paths = [archive.path for archive in archives]

    for archive, observations in zip(archives, processor.map_ordered(worker, paths)):
        label = archive.label
        partial = ConflictIndex()
        for name, identity in observations:
            partial.add(name, identity, label)
        index.merge(partial)
        logger.info(f"Completed archive: {archive.path} ({len(observations)} class entries)")

    logger.debug(f"Collected {len(index)} distinct class names from {len(archives)} archives")
    return index
