"""Data models for anagram lookups and dictionary loading."""

from __future__ import annotations

from dataclasses import dataclass, field

FOUND = "found"
NOT_FOUND = "not found"
NOT_USABLE = "not usable"


@dataclass(slots=True)
class LookupResult:
    """Result for a single lookup query."""

    query: str
    key: str | None
    status: str
    matches: tuple[str, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return self.status == FOUND


@dataclass(slots=True)
class LoadResult:
    """Summary returned after seeding the dictionary from a word source."""

    source: str
    total_tokens: int = 0
    inserted_words: int = 0
    duplicate_words: int = 0
    unusable_words: int = 0
    unique_keys: int = 0
