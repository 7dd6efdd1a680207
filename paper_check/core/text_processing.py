"""
Tokenization and token frequency counting.

A token is a maximal run of CJK ideographs (U+4E00-U+9FA5), ASCII letters or
ASCII digits, lowercased. The three character classes never share a token,
so "哈希123test" splits into "哈希", "123" and "test". Everything else is a
separator and is dropped.
"""

import re
from collections import Counter
from typing import Iterable, List, Optional

TOKEN_PATTERN = re.compile(r"[\u4e00-\u9fa5]+|[a-zA-Z]+|[0-9]+")


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into lowercase word tokens.

    Args:
        text: Raw document text; None and blank strings are allowed

    Returns:
        List of tokens in document order (empty for empty input)
    """
    if not text or not text.strip():
        return []
    return [match.group().lower() for match in TOKEN_PATTERN.finditer(text)]


def count_frequencies(tokens: Iterable[str]) -> Counter:
    """Map each distinct token to its number of occurrences."""
    return Counter(tokens)


def count_characters(tokens: Iterable[str]) -> Counter:
    """
    Map each character of the tokens to its number of occurrences.

    Chinese text has no word boundaries, so a whole clause is one token;
    character counts still overlap when two clauses differ in a few words.
    """
    return Counter(char for token in tokens for char in token)


def shared_tokens(freq_a: Counter, freq_b: Counter, limit: Optional[int] = 20) -> List[tuple]:
    """
    Tokens present in both tables, most frequent first.

    Returns (token, count_a, count_b) tuples ordered by combined count, then
    by token so the listing is stable.
    """
    common = [(token, freq_a[token], freq_b[token]) for token in freq_a.keys() & freq_b.keys()]
    common.sort(key=lambda row: (-(row[1] + row[2]), row[0]))
    return common[:limit] if limit is not None else common
