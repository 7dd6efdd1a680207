"""
Tests for DJB2 token hashing and SimHash fingerprint construction.
"""

import random

import pytest

from paper_check.core.simhash import (
    HASH_BITS, accumulate, build_fingerprint, fingerprint, fold, format_fingerprint, token_hash
)
from paper_check.core.text_processing import count_frequencies, tokenize

from .conftest import FULL_MATCH_TEXT, HIGH_SIMILAR_TEXT


def reference_djb2(token):
    value = 5381
    for char in token:
        value = (value * 33 + ord(char)) % 2 ** 64
    return value


class TestTokenHash:

    def test_known_values(self):
        assert token_hash("a") == 177670
        assert token_hash("ab") == 5863208
        assert token_hash("on") == 0x597902
        assert token_hash("哈") == 199277

    def test_empty_token(self):
        assert token_hash("") == 0

    def test_wraps_to_64_bits(self):
        token = "internationalization" * 5
        value = token_hash(token)
        assert 0 <= value < 2 ** 64
        assert value == reference_djb2(token)

    def test_known_wrapped_value(self):
        assert token_hash("internationalization") == 0x0C076CBA5D4716BB

    @pytest.mark.parametrize("token", ["simhash", "哈希", "123", "测试文本", "x" * 40])
    def test_matches_reference(self, token):
        assert token_hash(token) == reference_djb2(token)

    def test_narrower_width(self):
        assert token_hash("internationalization", bits=32) == 0x5D4716BB


class TestAccumulateAndFold:

    def test_single_token_votes(self):
        vector = accumulate({"a": 2})
        value = token_hash("a")
        for i, total in enumerate(vector):
            expected = 2 if (value >> (HASH_BITS - 1 - i)) & 1 else -2
            assert total == expected

    def test_fold_most_significant_first(self):
        vector = [0] * HASH_BITS
        vector[0] = 3
        vector[HASH_BITS - 1] = 1
        assert fold(vector) == (1 << 63) | 1

    def test_fold_ties_resolve_to_zero(self):
        assert fold([0] * HASH_BITS) == 0
        assert fold([-1] * HASH_BITS) == 0

    def test_opposing_tokens_cancel(self):
        # equal weights on every bit where the hashes disagree tie at zero
        vector = accumulate({"a": 1, "b": 1})
        a, b = token_hash("a"), token_hash("b")
        for i, total in enumerate(vector):
            shift = HASH_BITS - 1 - i
            if (a >> shift) & 1 != (b >> shift) & 1:
                assert total == 0


class TestBuildFingerprint:

    def test_empty_table(self):
        assert build_fingerprint({}) == 0

    def test_single_token_fingerprint_is_its_hash(self):
        assert build_fingerprint({"internationalization": 1}) == token_hash("internationalization")
        assert build_fingerprint({"imzdetection": 7}) == token_hash("imzdetection")

    def test_weighting(self):
        # "the" outweighs each other token twice over
        assert build_fingerprint(count_frequencies(tokenize("the cat sat on the mat"))) == 0x0B88AC06

    def test_order_independent(self):
        tokens = tokenize(FULL_MATCH_TEXT + HIGH_SIMILAR_TEXT + " the cat sat on the mat")
        table = count_frequencies(tokens)
        items = list(table.items())
        expected = build_fingerprint(table)
        rng = random.Random(7)
        for _ in range(5):
            rng.shuffle(items)
            assert build_fingerprint(dict(items)) == expected


class TestFingerprint:

    def test_known_value(self):
        assert fingerprint(FULL_MATCH_TEXT) == 0x040C812485098180

    def test_deterministic(self):
        assert fingerprint(FULL_MATCH_TEXT) == fingerprint(FULL_MATCH_TEXT)

    def test_empty_inputs(self):
        assert fingerprint("") == 0
        assert fingerprint(None) == 0
        assert fingerprint("  \n ") == 0
        assert fingerprint("!!!") == 0

    def test_case_insensitive(self):
        assert fingerprint("SimHash") == fingerprint("simhash")
        assert fingerprint("SimHash") == 0x0000D0B69505B452

    def test_punctuation_does_not_matter(self):
        assert fingerprint("the cat, sat; on THE mat!") == fingerprint("the cat sat on the mat")

    def test_in_range(self):
        value = fingerprint(HIGH_SIMILAR_TEXT)
        assert 0 <= value < 2 ** 64


class TestFormatFingerprint:

    def test_hex(self):
        assert format_fingerprint(0x0B88AC06) == "000000000b88ac06"

    def test_binary(self):
        rendered = format_fingerprint(1, binary=True)
        assert len(rendered) == 64
        assert rendered.endswith("01")
