import logging
import threading

import pytest

import dictionary as dictionary_module
from dictionary import AnagramDictionary
from models import FOUND, NOT_FOUND, NOT_USABLE
from utils import compute_key, log_insert, log_lookup


def seeded_dictionary() -> AnagramDictionary:
    dictionary = AnagramDictionary()
    for word in ("god", "dog", "act", "bob"):
        assert dictionary.insert(word)
    return dictionary


def test_lookup_groups_anagrams_case_insensitively() -> None:
    dictionary = seeded_dictionary()

    assert dictionary.lookup("GOD") == ("dog", "god")
    assert dictionary.lookup("cat") == ("act",)
    assert dictionary.lookup("act") == ("act",)
    assert dictionary.lookup("bob") == ("bob",)


def test_lookup_unknown_and_unusable_return_none() -> None:
    dictionary = seeded_dictionary()

    assert dictionary.lookup("unknown") is None
    assert dictionary.lookup("###") is None
    assert AnagramDictionary().lookup("###") is None


def test_missed_lookup_does_not_create_keys() -> None:
    dictionary = seeded_dictionary()
    before = dictionary.keys()

    dictionary.lookup("unknown")
    dictionary.lookup("zzz")

    assert dictionary.keys() == before
    assert len(dictionary) == 3


def test_insert_duplicate_is_refused() -> None:
    dictionary = AnagramDictionary()

    assert dictionary.insert("dog") is True
    assert dictionary.insert("dog") is False
    assert dictionary.lookup("dog") == ("dog",)
    assert dictionary.word_count() == 1


def test_insert_symbols_only_is_refused() -> None:
    dictionary = seeded_dictionary()

    assert dictionary.insert("###") is False
    assert len(dictionary) == 3
    assert dictionary.word_count() == 4


def test_original_forms_are_preserved() -> None:
    dictionary = AnagramDictionary()
    dictionary.insert("Kayak")
    dictionary.insert("kayak")
    dictionary.insert("C\tA\tT\t")
    dictionary.insert("act")

    assert dictionary.lookup("KAYAK") == ("Kayak", "kayak")
    assert dictionary.lookup("cat") == ("C\tA\tT\t", "act")
    assert "C\tA\tT\t" in dictionary
    assert "CAT" not in dictionary


def test_groups_are_sorted_regardless_of_insert_order() -> None:
    dictionary = AnagramDictionary()
    for word in ("tinsel", "silent", "Listen", "enlist"):
        dictionary.insert(word)

    assert dictionary.lookup("listen") == ("Listen", "enlist", "silent", "tinsel")


def test_lookup_returns_a_snapshot() -> None:
    dictionary = seeded_dictionary()
    snapshot = dictionary.lookup("dog")

    dictionary.insert("GOD")

    assert snapshot == ("dog", "god")
    assert dictionary.lookup("dog") == ("GOD", "dog", "god")


def test_find_reports_status_and_key() -> None:
    dictionary = seeded_dictionary()

    found = dictionary.find("GOD")
    assert found.status == FOUND
    assert found.found
    assert found.key == "dgo"
    assert found.matches == ("dog", "god")

    missing = dictionary.find("unknown")
    assert missing.status == NOT_FOUND
    assert missing.key == "knnnouw"
    assert missing.matches == ()

    unusable = dictionary.find("###")
    assert unusable.status == NOT_USABLE
    assert unusable.key is None


def test_trace_hooks_receive_every_call() -> None:
    inserts: list[tuple] = []
    lookups: list[tuple] = []
    dictionary = AnagramDictionary(
        on_insert=lambda *args: inserts.append(args),
        on_lookup=lambda *args: lookups.append(args),
    )

    dictionary.insert("dog")
    dictionary.insert("dog")
    dictionary.insert("###")
    dictionary.lookup("god")
    dictionary.lookup("###")

    assert inserts == [("dog", "dgo", True), ("dog", "dgo", False), ("###", None, False)]
    assert lookups == [("god", "dgo", ("dog",)), ("###", None, None)]


def test_load_text_counts_outcomes() -> None:
    dictionary = AnagramDictionary()
    result = dictionary.load_text("bob god\nact dog dog ###")

    assert result.total_tokens == 6
    assert result.inserted_words == 4
    assert result.duplicate_words == 1
    assert result.unusable_words == 1
    assert result.unique_keys == 3


def test_load_wordlist_reads_file_and_reports_progress(tmp_path) -> None:
    wordlist = tmp_path / "words.txt"
    wordlist.write_text("listen\nsilent enlist\n\nevil vile\n!!!\n", encoding="utf-8")
    progress: list[float] = []

    dictionary = AnagramDictionary()
    result = dictionary.load_wordlist(str(wordlist), progress_callback=progress.append)

    assert result.source == str(wordlist)
    assert result.inserted_words == 5
    assert result.unusable_words == 1
    assert result.unique_keys == 2
    assert progress[-1] == 1.0
    assert dictionary.lookup("tinsel") == ("enlist", "listen", "silent")
    assert dictionary.lookup("LIVE") == ("evil", "vile")


def test_load_wordlist_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        AnagramDictionary().load_wordlist(str(tmp_path / "missing.txt"))


def test_logging_hooks_report_insert_and_lookup(caplog) -> None:
    dictionary = AnagramDictionary(on_insert=log_insert, on_lookup=log_lookup)

    with caplog.at_level(logging.DEBUG, logger="utils"):
        dictionary.insert("dog")
        dictionary.insert("dog")
        dictionary.insert("###")
        dictionary.lookup("GOD")

    records = [(record.levelname, record.getMessage()) for record in caplog.records if record.name == "utils"]
    assert records == [
        ("DEBUG", "Inserted 'dog' into the anagram dictionary under key 'dgo'."),
        ("DEBUG", "'dog' already exists within the anagram dictionary."),
        ("WARNING", "Failed to compute a valid anagram key for the text '###'."),
        ("INFO", "Matching anagrams for 'GOD': [dog]."),
    ]


def test_logging_hook_reports_unusable_and_missing_lookups(caplog) -> None:
    dictionary = AnagramDictionary(on_lookup=log_lookup)

    with caplog.at_level(logging.INFO, logger="utils"):
        dictionary.lookup("###")
        dictionary.lookup("unknown")

    records = [(record.levelname, record.getMessage()) for record in caplog.records if record.name == "utils"]
    assert records == [
        ("WARNING", "Failed to compute a valid anagram key for the text '###'."),
        ("INFO", "No matching anagrams were found for '###'."),
        ("INFO", "No matching anagrams were found for 'unknown'."),
    ]


def test_concurrent_inserts_and_lookups_keep_groups_consistent() -> None:
    dictionary = AnagramDictionary()
    letters = "abcdefgh"
    words = sorted({"".join(letters[(i + j) % 8] for j in range(i % 5 + 1)) + str(i % 7) for i in range(2000)})
    chunks = [words[i::4] for i in range(4)]
    errors: list[BaseException] = []

    def writer(chunk: list[str]) -> None:
        try:
            for word in chunk:
                dictionary.insert(word)
                dictionary.insert(word.upper())
        except BaseException as exc:
            errors.append(exc)

    def reader() -> None:
        try:
            for word in words:
                group = dictionary.lookup(word)
                assert group is None or len(group) > 0
        except BaseException as exc:
            errors.append(exc)

    threads = [threading.Thread(target=writer, args=(chunk,)) for chunk in chunks]
    threads += [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    expected = set(words) | {word.upper() for word in words}
    assert dictionary.word_count() == len(expected)
    for key in dictionary.keys():
        group = dictionary.lookup(key)
        assert group
        assert list(group) == sorted(set(group))


def test_find_and_load_compute_each_key_once(monkeypatch) -> None:
    calls: list[str] = []

    def counting_compute_key(text: str) -> str | None:
        calls.append(text)
        return compute_key(text)

    monkeypatch.setattr(dictionary_module, "compute_key", counting_compute_key)
    dictionary = AnagramDictionary()

    dictionary.load_text("dog god dog ###")
    assert calls == ["dog", "god", "dog", "###"]

    calls.clear()
    dictionary.find("GOD")
    assert calls == ["GOD"]
