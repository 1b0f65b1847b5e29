from .archive import ArchiveEntry, ArchiveOpenError, ArchiveReader, ArchiveRef, ZipArchiveReader
from .classpath import Classpath
from .report.conflict import ConflictRecord, report
from .report.store import ReportFile, ReportFormatError, ReportManifest
from .scan.collector import collect, collect_parallel
from .scan.conflict_index import ConflictIndex
from .scan.entry_filter import EntryFilter
from .scan.policy import DistinctnessPolicy
from .settings import ConfigurationError, ScanSettings
from .utils.processor import Processor
