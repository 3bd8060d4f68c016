import pytest

from textsearch.engine.count import count_occurrences


def test_single_occurrence():
    assert count_occurrences("hello world", "hello") == 1


def test_no_occurrence():
    assert count_occurrences("hello world", "bye") == 0


def test_counts_are_non_overlapping():
    assert count_occurrences("aaaa", "aa") == 2
    assert count_occurrences("aaaaa", "aa") == 2
    assert count_occurrences("abababa", "aba") == 2


def test_case_sensitive():
    assert count_occurrences("Hello hello HELLO", "hello") == 1


def test_needle_longer_than_line():
    assert count_occurrences("ab", "abc") == 0


def test_unicode_needle():
    assert count_occurrences("привет, мир, привет", "привет") == 2


def test_doubled_line_counts_at_least_twice():
    line = "xaax"
    assert count_occurrences(line + line, "aa") >= 2 * count_occurrences(line, "aa")


def test_empty_needle_rejected():
    with pytest.raises(ValueError):
        count_occurrences("anything", "")
