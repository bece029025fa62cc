"""Anagram dictionary: words indexed by their canonical anagram key."""

from __future__ import annotations

import threading
from bisect import bisect_left
from pathlib import Path
from typing import Callable, Iterable

from models import FOUND, NOT_FOUND, NOT_USABLE, LoadResult, LookupResult
from utils import compute_key, parse_words

ProgressCallback = Callable[[float], None]
InsertHook = Callable[[str, str | None, bool], None]
LookupHook = Callable[[str, str | None, tuple[str, ...] | None], None]


class AnagramDictionary:
    """
    Map canonical key -> sorted group of original-form words.

    Every key present in the index has at least one word; lookups never
    create entries. A lock guards the index so a loader thread and a reader
    can share one instance.
    """

    def __init__(
        self,
        on_insert: InsertHook | None = None,
        on_lookup: LookupHook | None = None,
    ) -> None:
        self._index: dict[str, list[str]] = {}
        self._lock = threading.Lock()
        self.on_insert = on_insert
        self.on_lookup = on_lookup

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, text: object) -> bool:
        if not isinstance(text, str):
            return False
        key = compute_key(text)
        if key is None:
            return False
        with self._lock:
            group = self._index.get(key)
            return group is not None and _contains_sorted(group, text)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._index)

    def word_count(self) -> int:
        with self._lock:
            return sum(len(group) for group in self._index.values())

    def insert(self, text: str) -> bool:
        """Add text under its key; False when unusable or already present."""
        return self._insert(text, compute_key(text))

    def _insert(self, text: str, key: str | None) -> bool:
        inserted = False
        if key is not None:
            with self._lock:
                group = self._index.setdefault(key, [])
                pos = bisect_left(group, text)
                if pos == len(group) or group[pos] != text:
                    group.insert(pos, text)
                    inserted = True

        if self.on_insert:
            self.on_insert(text, key, inserted)
        return inserted

    def lookup(self, text: str) -> tuple[str, ...] | None:
        """Return a snapshot of every word sharing the text's key, or None."""
        return self._lookup(text, compute_key(text))

    def _lookup(self, text: str, key: str | None) -> tuple[str, ...] | None:
        matches: tuple[str, ...] | None = None
        if key is not None:
            with self._lock:
                group = self._index.get(key)
                if group:
                    matches = tuple(group)

        if self.on_lookup:
            self.on_lookup(text, key, matches)
        return matches

    def find(self, text: str) -> LookupResult:
        """Lookup wrapped with its key and status for presentation."""
        key = compute_key(text)
        matches = self._lookup(text, key)
        if key is None:
            return LookupResult(query=text, key=None, status=NOT_USABLE)
        if matches is None:
            return LookupResult(query=text, key=key, status=NOT_FOUND)
        return LookupResult(query=text, key=key, status=FOUND, matches=matches)

    def insert_many(self, words: Iterable[str], source: str = "<words>") -> LoadResult:
        result = LoadResult(source=source)
        for word in words:
            self._tally(result, word)
        result.unique_keys = len(self)
        return result

    def load_text(self, raw_text: str, source: str = "<text>") -> LoadResult:
        """Seed the dictionary from whitespace-separated words in a text blob."""
        return self.insert_many(parse_words(raw_text), source=source)

    def load_wordlist(
        self,
        wordlist_path: str,
        progress_callback: ProgressCallback | None = None,
    ) -> LoadResult:
        """
        Seed the dictionary from a wordlist file.

        Lines may hold several whitespace-separated words. Progress is
        reported as the fraction of bytes consumed.
        """
        path = Path(wordlist_path)
        if not path.exists():
            raise FileNotFoundError(f"Wordlist file not found: {wordlist_path}")

        total_bytes = max(path.stat().st_size, 1)
        result = LoadResult(source=str(path))
        lines = 0

        with path.open("rb") as handle:
            bytes_processed = 0
            for raw_line in handle:
                bytes_processed += len(raw_line)
                lines += 1

                for word in parse_words(raw_line.decode("utf-8", errors="ignore")):
                    self._tally(result, word)

                if progress_callback and lines % 5000 == 0:
                    progress_callback(min(bytes_processed / total_bytes, 1.0))

        result.unique_keys = len(self)
        if progress_callback:
            progress_callback(1.0)
        return result

    def _tally(self, result: LoadResult, word: str) -> None:
        result.total_tokens += 1
        key = compute_key(word)
        if self._insert(word, key):
            result.inserted_words += 1
        elif key is None:
            result.unusable_words += 1
        else:
            result.duplicate_words += 1


def _contains_sorted(group: list[str], text: str) -> bool:
    pos = bisect_left(group, text)
    return pos < len(group) and group[pos] == text
