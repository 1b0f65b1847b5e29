"""ConflictRecord and selection of conflicting entry names from a ConflictIndex."""

from typing import Any

import msgpack

from ..scan.conflict_index import ConflictIndex
from ..scan.policy import DistinctnessPolicy, IGNORED_CONTENT_IDENTITY


class ConflictRecord:
    """A class entry name found more than once on the classpath.

    Attributes:
        name: Entry name inside the archives (e.g. com/example/Foo.class)
        buckets: Content identities in the order they were first seen, each with
                 the labels of the archives that contributed that identity, in
                 archive order. A label repeats when one archive holds the entry
                 more than once.
    """

    def __init__(self, name: str, buckets: list[tuple[int, list[str]]]):
        self.name = name
        self.buckets = buckets

    @property
    def archives(self) -> list[str]:
        """All contributing labels, bucket by bucket."""
        return [label for _, labels in self.buckets for label in labels]

    @property
    def is_content_conflict(self) -> bool:
        """True when the occurrences do not all share the same content identity."""
        return len(self.buckets) > 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConflictRecord):
            return False
        return self.name == other.name and self.buckets == other.buckets

    def __repr__(self) -> str:
        return f"ConflictRecord({self.name!r}, {self.buckets!r})"

    def to_msgpack(self) -> bytes:
        """Serialize to msgpack as [name, [[identity, [labels...]], ...]]."""
        result = msgpack.dumps([self.name, [[identity, labels] for identity, labels in self.buckets]])
        assert isinstance(result, bytes)
        return result

    @classmethod
    def from_msgpack(cls, data: bytes) -> "ConflictRecord":
        decoded = msgpack.loads(data)
        assert isinstance(decoded, list)
        name: str = decoded[0]
        bucket_data: list[list[Any]] = decoded[1]
        return cls(name, [(identity, list(labels)) for identity, labels in bucket_data])


def is_reportable(index: ConflictIndex, name: str, policy: DistinctnessPolicy) -> bool:
    """Whether name is a conflict in index under policy.

    With content ignored, only the shared bucket is consulted. Otherwise the name
    is a conflict as soon as it occurs twice, whether with the same identity or
    with different ones.
    """
    if policy is DistinctnessPolicy.NONE:
        return len(index[name].get(IGNORED_CONTENT_IDENTITY, ())) >= 2
    return index.occurrences(name) >= 2


def report(index: ConflictIndex, policy: DistinctnessPolicy) -> list[ConflictRecord]:
    """Select the conflicting names of index.

    Args:
        index: Completed index built with the same policy
        policy: Distinctness policy of the run

    Returns:
        ConflictRecords in lexical name order, buckets and labels in insertion order
    """
    return [
        ConflictRecord(name, [(identity, list(labels)) for identity, labels in identities.items()])
        for name, identities in index.items()
        if is_reportable(index, name, policy)
    ]
