# src/textsearch/engine/count.py

"""
Literal substring counting on a single line.

Matching is exact: no normalisation, no case folding.
"""


def count_occurrences(line: str, needle: str) -> int:
    """
    Return the number of non-overlapping occurrences of `needle` in `line`.

    After a match at index i the search resumes at i + len(needle),
    so "aa" occurs twice in "aaaa", not three times.
    """
    if not needle:
        raise ValueError("needle must be a non-empty string")

    # str.count already skips past each match.
    return line.count(needle)
