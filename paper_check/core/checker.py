"""
The PlagiarismChecker service: one pair of texts in, one ComparisonResult out.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import COSINE_UNITS, STRATEGIES
from .logging_config import LoggerMixin
from .scoring import Verdict, classify, cosine_similarity, hamming_distance, similarity
from .simhash import HASH_BITS, build_fingerprint
from .text_processing import count_characters, count_frequencies, tokenize
from .validation import ParameterValidator, validate_inputs


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing one original document with one suspect document."""

    strategy: str
    similarity: float
    verdict: Verdict
    token_count_original: int
    token_count_suspect: int
    distance: Optional[int] = None
    fingerprint_original: Optional[int] = None
    fingerprint_suspect: Optional[int] = None
    bits: int = HASH_BITS
    cosine_unit: Optional[str] = None

    @property
    def percentage(self) -> float:
        return self.similarity * 100.0


class PlagiarismChecker(LoggerMixin):
    """
    Compares pairs of documents.

    The checker holds configuration only, so one instance can be reused for
    any number of independent comparisons.
    """

    @validate_inputs(
        strategy=lambda x: ParameterValidator.validate_choice(x, "strategy", STRATEGIES),
        bits=lambda x: ParameterValidator.validate_positive_integer(x, "bits", min_value=8, max_value=512),
        cosine_unit=lambda x: ParameterValidator.validate_choice(x, "cosine_unit", COSINE_UNITS)
    )
    def __init__(self,
                 strategy: str = "simhash",
                 bits: int = HASH_BITS,
                 max_file_size_mb: Optional[int] = None,
                 cosine_unit: str = "char"):
        """
        Initialize PlagiarismChecker.

        Args:
            strategy: "simhash" (fingerprint + Hamming distance) or "cosine"
                (cosine similarity of frequency vectors)
            bits: SimHash fingerprint width
            max_file_size_mb: Size limit applied by compare_files
            cosine_unit: What the cosine strategy counts, "char" (each CJK
                ideograph, letter or digit) or "token" (whole tokens)

        Raises:
            ParameterValidationError: If parameters are invalid
        """
        self.strategy = strategy
        self.bits = bits
        self.max_file_size_mb = max_file_size_mb
        self.cosine_unit = cosine_unit

    def compare(self, original: Optional[str], suspect: Optional[str]) -> ComparisonResult:
        """
        Score how similar ``suspect`` is to ``original``.

        Empty or missing texts are valid: two empty texts are identical
        (similarity 1.0), an empty text against a non-empty one scores 0.0.
        The reported Hamming distance is always the raw fingerprint distance.
        """
        with self.log_operation("compare", strategy=self.strategy):
            tokens_original = tokenize(original)
            tokens_suspect = tokenize(suspect)
            freq_original = count_frequencies(tokens_original)
            freq_suspect = count_frequencies(tokens_suspect)

            if not freq_original or not freq_suspect:
                self.logger.warning("Original or suspect document has no tokens, result may be inaccurate")

            if self.strategy == "cosine":
                result = self._compare_cosine(tokens_original, tokens_suspect)
            else:
                result = self._compare_simhash(freq_original, freq_suspect)

            self.logger.debug(
                f"Similarity {result.similarity:.4f} ({result.verdict.key})",
                extra={'similarity': result.similarity}
            )
            return result

    def _compare_simhash(self, freq_original, freq_suspect) -> ComparisonResult:
        hash_original = build_fingerprint(freq_original, self.bits)
        hash_suspect = build_fingerprint(freq_suspect, self.bits)
        distance = hamming_distance(hash_original, hash_suspect, self.bits)
        if bool(freq_original) != bool(freq_suspect):
            # an empty document shares nothing with a non-empty one
            score = 0.0
        else:
            score = similarity(distance, self.bits)

        return ComparisonResult(
            strategy="simhash",
            similarity=score,
            verdict=classify(score),
            token_count_original=sum(freq_original.values()),
            token_count_suspect=sum(freq_suspect.values()),
            distance=distance,
            fingerprint_original=hash_original,
            fingerprint_suspect=hash_suspect,
            bits=self.bits,
        )

    def _compare_cosine(self, tokens_original, tokens_suspect) -> ComparisonResult:
        count = count_characters if self.cosine_unit == "char" else count_frequencies
        score = cosine_similarity(count(tokens_original), count(tokens_suspect))
        return ComparisonResult(
            strategy="cosine",
            similarity=score,
            verdict=classify(score),
            token_count_original=len(tokens_original),
            token_count_suspect=len(tokens_suspect),
            bits=self.bits,
            cosine_unit=self.cosine_unit,
        )

    def compare_files(self, original_path: Union[str, Path], suspect_path: Union[str, Path]) -> ComparisonResult:
        """
        Read two documents from disk and compare them.

        Raises:
            FileValidationError: If a file is missing, not a file, too large
                or cannot be decoded
        """
        from ..utils.text_reader import read_text_file

        with self.log_operation("compare_files", file_path=str(suspect_path)):
            original = read_text_file(original_path, max_size_mb=self.max_file_size_mb, field="original")
            suspect = read_text_file(suspect_path, max_size_mb=self.max_file_size_mb, field="suspect")
            return self.compare(original, suspect)
