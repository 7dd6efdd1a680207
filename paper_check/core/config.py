"""
Runtime configuration loaded from the environment (and a .env file).
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from .validation import ParameterValidator

STRATEGIES = ("simhash", "cosine")
COSINE_UNITS = ("char", "token")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CheckerConfig:
    strategy: str = "simhash"
    cosine_unit: str = "char"
    log_level: str = "WARNING"
    log_dir: Optional[str] = None
    structured_logging: bool = False
    max_file_size_mb: int = 100

    @classmethod
    def from_env(cls, dotenv: bool = True, dotenv_path: Optional[str] = None) -> "CheckerConfig":
        """
        Build configuration from PAPER_CHECK_* environment variables.

        Args:
            dotenv: Whether to load a .env file first (existing variables win)
            dotenv_path: Explicit .env file, searched for when omitted

        Raises:
            ParameterValidationError: If a variable holds an invalid value
        """
        if dotenv:
            load_dotenv(dotenv_path)

        strategy = ParameterValidator.validate_choice(
            os.getenv("PAPER_CHECK_STRATEGY", cls.strategy), "PAPER_CHECK_STRATEGY", STRATEGIES
        )
        cosine_unit = ParameterValidator.validate_choice(
            os.getenv("PAPER_CHECK_COSINE_UNIT", cls.cosine_unit), "PAPER_CHECK_COSINE_UNIT", COSINE_UNITS
        )
        log_level = ParameterValidator.validate_choice(
            os.getenv("PAPER_CHECK_LOG_LEVEL", cls.log_level), "PAPER_CHECK_LOG_LEVEL", LOG_LEVELS
        ).upper()
        max_size = ParameterValidator.validate_positive_integer(
            os.getenv("PAPER_CHECK_MAX_FILE_SIZE_MB", cls.max_file_size_mb), "PAPER_CHECK_MAX_FILE_SIZE_MB"
        )

        return cls(
            strategy=strategy,
            cosine_unit=cosine_unit,
            log_level=log_level,
            log_dir=os.getenv("PAPER_CHECK_LOG_DIR") or None,
            structured_logging=os.getenv("PAPER_CHECK_STRUCTURED_LOGS", "").strip().lower() in _TRUE_VALUES,
            max_file_size_mb=max_size,
        )

    def override(self, **changes) -> "CheckerConfig":
        """Copy with the given non-None fields replaced."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})
