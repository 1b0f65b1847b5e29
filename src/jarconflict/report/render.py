from typing import Iterable, Iterator, Sequence

from ..scan.policy import DistinctnessPolicy
from .conflict import ConflictRecord


def render_lines(records: Iterable[ConflictRecord], policy: DistinctnessPolicy) -> Iterator[str]:
    """Render records as text, one header line per name and one line per identity bucket.

    Example (size policy):
        com/example/Foo.class
          size=10: a.jar, b.jar
          size=20: c.jar
    """
    for record in records:
        yield record.name
        for identity, labels in record.buckets:
            yield f"  {policy.describe_identity(identity)}: {', '.join(labels)}"


def render_summary(records: Sequence[ConflictRecord], archive_count: int) -> str:
    content_conflicts = sum(1 for record in records if record.is_content_conflict)
    return (f"{len(records)} conflicting class(es) across {archive_count} archive(s), "
            f"{content_conflicts} with differing content")
