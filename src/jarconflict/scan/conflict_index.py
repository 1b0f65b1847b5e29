"""Two-level index of class entries: name -> content identity -> archive labels."""

from typing import Iterator


class ConflictIndex:
    """Records which archives contributed each entry name and content identity.

    The outer level is iterated in lexical order of entry names. The name order is
    computed when the index is first read after new names were added, not on every
    insertion. The inner level (identity -> labels) and each label list keep
    insertion order. Nothing is ever removed or deduplicated: recording the same
    (name, identity, label) twice appends the label twice.

    Example:
        index = ConflictIndex()
        index.add('a/Foo.class', 10, 'a.jar')
        index.add('a/Foo.class', 10, 'b.jar')
        index['a/Foo.class']  # {10: ['a.jar', 'b.jar']}
    """

    def __init__(self):
        self._sorted_names: list[str] | None = []
        self._buckets: dict[str, dict[int, list[str]]] = {}

    def add(self, name: str, identity: int, label: str) -> None:
        """Record one observation, creating the name and identity levels as needed.

        Args:
            name: Entry name inside the archive
            identity: Content identity computed under the run's policy
            label: Label of the archive the entry was found in
        """
        identities = self._buckets.get(name)
        if identities is None:
            identities = {}
            self._buckets[name] = identities
            self._sorted_names = None

        labels = identities.get(identity)
        if labels is None:
            identities[identity] = [label]
        else:
            labels.append(label)

    def merge(self, other: "ConflictIndex") -> None:
        """Append every observation of other after the observations already held."""
        for name, identities in other.items():
            for identity, labels in identities.items():
                for label in labels:
                    self.add(name, identity, label)

    def _names(self) -> list[str]:
        if self._sorted_names is None:
            self._sorted_names = sorted(self._buckets)
        return self._sorted_names

    def items(self) -> Iterator[tuple[str, dict[int, list[str]]]]:
        """Iterate (name, identity buckets) pairs in lexical name order."""
        for name in self._names():
            yield name, self._buckets[name]

    def occurrences(self, name: str) -> int:
        """Total number of labels recorded for name across all identities."""
        return sum(len(labels) for labels in self._buckets.get(name, {}).values())

    def __getitem__(self, name: str) -> dict[int, list[str]]:
        return self._buckets[name]

    def __contains__(self, name: object) -> bool:
        return name in self._buckets

    def __iter__(self) -> Iterator[str]:
        return iter(self._names())

    def __len__(self) -> int:
        return len(self._buckets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConflictIndex):
            return False
        return self._names() == other._names() and all(
            list(self._buckets[name].items()) == list(other._buckets[name].items())
            for name in self._names())

    def __repr__(self) -> str:
        return f"ConflictIndex({dict(self.items())!r})"
