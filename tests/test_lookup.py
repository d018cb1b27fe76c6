from __future__ import annotations

from scrabkeeper.core.lookup import check_words, load_word_list, word_set_lookup


def test_word_set_lookup_is_case_insensitive() -> None:
    contains = word_set_lookup(["Cat", "  ", "ÉTÉ"])
    assert contains("CAT")
    assert contains("été")
    assert not contains("DOG")


def test_load_word_list(tmp_path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("# komentar\ncat\n\ndog\n", encoding="utf-8")
    contains = load_word_list(path)
    assert contains("CAT") and contains("dog")
    assert not contains("# komentar")


def test_check_words_asks_once_per_word() -> None:
    calls: list[str] = []

    def lookup(word: str) -> bool:
        calls.append(word)
        return word == "CAT"

    assert check_words(lookup, ["CAT", "XQ", "CAT"]) == {"CAT": True, "XQ": False}
    assert calls == ["CAT", "XQ"]
