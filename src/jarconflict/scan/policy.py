from enum import StrEnum

from ..archive import ArchiveEntry
from ..settings import ConfigurationError

# Identity shared by every entry when content is ignored
IGNORED_CONTENT_IDENTITY = 0


class DistinctnessPolicy(StrEnum):
    """How the content identity of an entry is derived.

    The policy is chosen once per run and applies to every entry of every
    archive.
    """
    SIZE = 'size'
    CRC = 'crc'
    NONE = 'none'

    @classmethod
    def parse(cls, value: "str | DistinctnessPolicy") -> "DistinctnessPolicy":
        """Convert a policy selector to a DistinctnessPolicy.

        Raises:
            ConfigurationError: If value is not one of size, crc or none
        """
        try:
            return cls(value)
        except ValueError:
            choices = ', '.join(p.value for p in cls)
            raise ConfigurationError(f"Unknown check policy {value!r} (expected one of: {choices})") from None

    def content_identity(self, entry: ArchiveEntry) -> int:
        """Compute the identity used to group same-named entries.

        Only directory metadata is used: the uncompressed size, the CRC-32
        widened to a non-negative int, or a constant when content is ignored.
        """
        if self is DistinctnessPolicy.SIZE:
            return entry.size
        if self is DistinctnessPolicy.CRC:
            return entry.crc32 & 0xFFFFFFFF
        return IGNORED_CONTENT_IDENTITY

    def describe_identity(self, identity: int) -> str:
        """Short human-readable label for an identity bucket."""
        if self is DistinctnessPolicy.SIZE:
            return f"size={identity}"
        if self is DistinctnessPolicy.CRC:
            return f"crc={identity:08x}"
        return "archives"
