"""Scripted anagram session: seed a dictionary, insert edge-case words, report lookups."""

from __future__ import annotations

import logging

from dictionary import AnagramDictionary
from utils import describe_lookup, log_insert, setup_logging

logger = logging.getLogger(__name__)

SEED_WORDS = ("bob", "god", "act", "dog")
EXTRA_WORDS = ("Kayak", "kayak", "C\tA\tT\t", "***Cat***", "dog", "###")
QUERIES = ("KAYAK", "cat", "act", "GOD", "unknown", "###")


def run_demo(dictionary: AnagramDictionary | None = None) -> dict[str, tuple[str, ...] | None]:
    """Run the scripted session and return query -> matches (None for no match)."""
    if dictionary is None:
        dictionary = AnagramDictionary(on_insert=log_insert)

    seeded = dictionary.load_text("\n".join(SEED_WORDS), source="<seed>")
    logger.debug("Seeded %d words under %d keys.", seeded.inserted_words, seeded.unique_keys)

    for word in EXTRA_WORDS:
        dictionary.insert(word)

    results: dict[str, tuple[str, ...] | None] = {}
    for query in QUERIES:
        matches = dictionary.lookup(query)
        logger.info("%s", describe_lookup(query, matches))
        results[query] = matches
    return results


def main() -> None:
    setup_logging("INFO", filename=None)
    run_demo()


if __name__ == "__main__":
    main()
