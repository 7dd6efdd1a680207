"""
Core functionality for document similarity checking.

This package contains the algorithms and the infrastructure they rely on:
- Tokenization and token frequency counting
- SimHash fingerprinting
- Hamming distance, cosine similarity and verdicts
- The PlagiarismChecker service
- Logging, validation and configuration
"""

from .text_processing import tokenize, count_frequencies, count_characters, shared_tokens
from .simhash import HASH_BITS, token_hash, build_fingerprint, fingerprint, format_fingerprint
from .scoring import hamming_distance, similarity, cosine_similarity, classify, Verdict
from .checker import PlagiarismChecker, ComparisonResult
from .config import CheckerConfig, STRATEGIES, COSINE_UNITS
from .logging_config import setup_logging, LoggerMixin, ProductionLogger
from .validation import (
    ValidationError, FileValidationError, EncodingDetectionError,
    ParameterValidationError, FileValidator, ParameterValidator,
    validate_inputs, handle_exceptions
)

__all__ = [
    'tokenize',
    'count_frequencies',
    'count_characters',
    'shared_tokens',
    'HASH_BITS',
    'token_hash',
    'build_fingerprint',
    'fingerprint',
    'format_fingerprint',
    'hamming_distance',
    'similarity',
    'cosine_similarity',
    'classify',
    'Verdict',
    'PlagiarismChecker',
    'ComparisonResult',
    'CheckerConfig',
    'STRATEGIES',
    'COSINE_UNITS',
    'setup_logging',
    'LoggerMixin',
    'ProductionLogger',
    'ValidationError',
    'FileValidationError',
    'EncodingDetectionError',
    'ParameterValidationError',
    'FileValidator',
    'ParameterValidator',
    'validate_inputs',
    'handle_exceptions'
]
