from __future__ import annotations

from pathlib import Path

from textpad_engine.spelling import Dictionary, check, load_dictionary, tokenize


def make_dictionary(*words: str) -> Dictionary:
    return Dictionary.from_words(words)


def test_check_reports_unknown_words_case_insensitively() -> None:
    dictionary = make_dictionary("hello", "world")

    result = check("Hello, wrold! 123", dictionary)

    assert result.status == "misspelled"
    assert result.misspelled == ("wrold",)


def test_check_collapses_duplicates_and_sorts() -> None:
    dictionary = make_dictionary("the")

    result = check("Zeta the alpha ZETA Alpha", dictionary)

    assert list(result) == ["alpha", "zeta"]


def test_check_with_all_words_known_is_clean() -> None:
    result = check("Hello world", make_dictionary("hello", "world"))

    assert result.available is True
    assert result.clean is True
    assert len(result) == 0


def test_check_without_dictionary_is_unavailable() -> None:
    for dictionary in (None, Dictionary()):
        result = check("anything at all", dictionary)

        assert result.status == "unavailable"
        assert result.available is False
        assert result.clean is False


def test_tokenize_ignores_digits_punctuation_and_non_ascii_words() -> None:
    tokens = list(tokenize("Run 42 times: abc123, café; snake_case x-ray"))

    assert tokens == ["run", "times", "x", "ray"]


def test_tokenize_splits_on_apostrophes() -> None:
    assert list(tokenize("Don't")) == ["don", "t"]


def test_dictionary_normalizes_words() -> None:
    dictionary = Dictionary.from_words(["  Apple\n", "apple", "", "BANANA"])

    assert len(dictionary) == 2
    assert "apple" in dictionary
    assert "banana" in dictionary
    assert list(dictionary) == ["apple", "banana"]


def test_load_dictionary_reads_word_list(tmp_path: Path) -> None:
    word_list = tmp_path / "dict.txt"
    word_list.write_text("Hello\nworld\n\n", encoding="utf-8")

    dictionary = load_dictionary(word_list)

    assert dictionary.available is True
    assert set(dictionary) == {"hello", "world"}
    assert dictionary.source == str(word_list)


def test_load_dictionary_missing_file_disables_spell_check(tmp_path: Path) -> None:
    dictionary = load_dictionary(tmp_path / "missing.txt")

    assert dictionary.available is False
    assert check("text", dictionary).status == "unavailable"
