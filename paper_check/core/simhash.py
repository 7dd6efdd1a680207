"""
SimHash fingerprinting.

Every distinct token is hashed with DJB2 and votes on each bit of the
fingerprint with a weight equal to its frequency: a set bit adds the weight,
a clear bit subtracts it. Bits whose total ends up positive are set in the
result. Documents sharing most of their frequent tokens therefore end up
with fingerprints that differ in only a few bits.

Bit index 0 of the accumulator is the most significant bit of the
fingerprint.
"""

from typing import List, Mapping, Optional

from .text_processing import count_frequencies, tokenize

HASH_BITS = 64
DJB2_SEED = 5381


def _mask(bits: int) -> int:
    return (1 << bits) - 1


def token_hash(token: str, bits: int = HASH_BITS) -> int:
    """
    DJB2 hash of a token, wrapped to ``bits`` bits.

    hash = hash * 33 + code point, starting from 5381. The empty token
    hashes to 0.

    Note: DJB2 mixes low bits poorly and short tokens leave the high bits
    of a 64-bit hash mostly untouched. It is kept as is so fingerprints
    stay comparable with previously recorded results.
    """
    if not token:
        return 0

    mask = _mask(bits)
    value = DJB2_SEED
    for char in token:
        value = ((value << 5) + value + ord(char)) & mask
    return value


def accumulate(frequencies: Mapping[str, int], bits: int = HASH_BITS) -> List[int]:
    """
    Weighted bit votes for a frequency table.

    Returns a list of ``bits`` signed totals, index 0 being the most
    significant bit. Order of the table does not matter.
    """
    vector = [0] * bits
    for token, weight in frequencies.items():
        value = token_hash(token, bits)
        for i in range(bits):
            if (value >> (bits - 1 - i)) & 1:
                vector[i] += weight
            else:
                vector[i] -= weight
    return vector


def fold(vector: List[int]) -> int:
    """Collapse bit votes into an integer; a tie (0) leaves the bit clear."""
    bits = len(vector)
    result = 0
    for i, total in enumerate(vector):
        if total > 0:
            result |= 1 << (bits - 1 - i)
    return result


def build_fingerprint(frequencies: Mapping[str, int], bits: int = HASH_BITS) -> int:
    """
    Fold a token frequency table into a SimHash fingerprint.

    Args:
        frequencies: Mapping of token to positive occurrence count
        bits: Fingerprint width

    Returns:
        Fingerprint in [0, 2**bits); 0 for an empty table
    """
    if not frequencies:
        return 0
    return fold(accumulate(frequencies, bits))


def fingerprint(text: Optional[str], bits: int = HASH_BITS) -> int:
    """SimHash fingerprint of raw text. Empty or missing text gives 0."""
    return build_fingerprint(count_frequencies(tokenize(text)), bits)


def format_fingerprint(value: int, bits: int = HASH_BITS, binary: bool = False) -> str:
    """Zero-padded hex (or binary) rendering of a fingerprint."""
    if binary:
        return format(value, f"0{bits}b")
    return format(value, f"0{(bits + 3) // 4}x")
