from typing import Iterable

CLASS_FILE_SUFFIX = '.class'
METADATA_PREFIX = 'META-INF'


class EntryFilter:
    """Decides which archive entries take part in conflict detection.

    An entry is kept when its name ends with ``.class``, is not under the
    archive's ``META-INF`` metadata directory, and starts with none of the
    configured exclusion prefixes (for example ``com/example/generated/``).

    The prefixes are kept sorted so that filters built from the same set of
    prefixes compare equal regardless of the order they were given in.
    """

    def __init__(self, exclusions: Iterable[str] = ()):
        self._exclusions: tuple[str, ...] = tuple(sorted(set(exclusions)))

    @property
    def exclusions(self) -> tuple[str, ...]:
        return self._exclusions

    def accepts(self, name: str) -> bool:
        if not name.endswith(CLASS_FILE_SUFFIX):
            return False
        if name.startswith(METADATA_PREFIX):
            return False
        # str.startswith accepts a tuple; an empty tuple never matches
        return not name.startswith(self._exclusions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryFilter):
            return False
        return self._exclusions == other._exclusions

    def __hash__(self) -> int:
        return hash(self._exclusions)

    def __repr__(self) -> str:
        return f"EntryFilter({list(self._exclusions)!r})"
