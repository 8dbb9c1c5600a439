from __future__ import annotations

"""Greedy longest-match lookup over multi-cell Braille patterns.

One index is built per pattern category (vowel clusters, shortcuts, symbols).
Entries are bucketed by their first dot value and each bucket is ordered
longest first, so the first hit is always the longest matching pattern.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence


@dataclass(frozen=True)
class PatternEntry:
    key: tuple[int, ...]
    text: str

    @property
    def length(self) -> int:
        return len(self.key)


class PatternIndex:
    """Read-only first-dot -> candidates mapping."""

    def __init__(self, buckets: Mapping[int, tuple[PatternEntry, ...]]) -> None:
        self._buckets = MappingProxyType(dict(buckets))

    @classmethod
    def build(cls, entries: Iterable[tuple[Sequence[int], str]]) -> "PatternIndex":
        grouped: dict[int, list[PatternEntry]] = {}
        for key, text in entries:
            key = tuple(key)
            if not key:
                continue
            grouped.setdefault(key[0], []).append(PatternEntry(key, text))
        # sorted() is stable: equal-length entries keep table order
        return cls({first: tuple(sorted(bucket, key=lambda e: -e.length)) for first, bucket in grouped.items()})

    def candidates(self, first: int) -> tuple[PatternEntry, ...]:
        return self._buckets.get(first, ())

    def match(self, dots: Sequence[int], index: int) -> Optional[PatternEntry]:
        """Return the longest entry whose key equals dots[index:index+len(key)]."""
        if not 0 <= index < len(dots):
            return None
        for entry in self.candidates(dots[index]):
            if tuple(dots[index:index + entry.length]) == entry.key:
                return entry
        return None

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())
