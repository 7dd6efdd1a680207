"""
Input validation and error handling for paper-check.

Custom exceptions, file and parameter validators, and decorators shared by
the checker service, the I/O helpers and the command line.
"""

import inspect
import logging
from functools import wraps
from pathlib import Path
from typing import Any, Iterable, Optional, Union


# Custom Exception Classes
class ValidationError(Exception):
    """Base class for validation errors."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)


class FileValidationError(ValidationError):
    """Exception raised for file-related validation errors."""
    pass


class EncodingDetectionError(FileValidationError):
    """Raised when none of the candidate encodings can decode a file."""
    pass


class ParameterValidationError(ValidationError):
    """Exception raised for parameter validation errors."""
    pass


# Validation Utilities
class FileValidator:
    """File validation utilities."""

    MAX_FILE_SIZE_MB = 100

    @staticmethod
    def validate_file_path(file_path: Union[str, Path],
                           must_exist: bool = True,
                           max_size_mb: Optional[float] = None,
                           field: str = "file_path") -> Path:
        """
        Simple file path validation.

        Args:
            file_path: Path to the file
            must_exist: Whether the file must exist
            max_size_mb: Maximum file size in MB
            field: Name reported in error messages

        Returns:
            Path object

        Raises:
            FileValidationError: If validation fails
        """
        if not file_path or not str(file_path).strip():
            raise FileValidationError(f"{field} cannot be empty", field=field, value=file_path)

        path = Path(str(file_path).strip())

        if must_exist and not path.exists():
            raise FileValidationError(f"File does not exist: {path}", field=field, value=file_path)

        if must_exist and not path.is_file():
            raise FileValidationError(f"Path is not a file: {path}", field=field, value=file_path)

        if must_exist and max_size_mb:
            size_mb = path.stat().st_size / (1024 * 1024)
            if size_mb > max_size_mb:
                raise FileValidationError(
                    f"File too large: {size_mb:.1f}MB (max: {max_size_mb}MB)",
                    field=field,
                    value=file_path
                )

        return path

    @staticmethod
    def validate_text_file(file_path: Union[str, Path],
                           max_size_mb: Optional[float] = None,
                           field: str = "file_path") -> Path:
        """Validate a document that is about to be read and compared."""
        return FileValidator.validate_file_path(
            file_path,
            must_exist=True,
            max_size_mb=max_size_mb or FileValidator.MAX_FILE_SIZE_MB,
            field=field
        )

    @staticmethod
    def validate_output_path(file_path: Union[str, Path], field: str = "result_path") -> Path:
        """Validate a result file path; the file itself may not exist yet."""
        path = FileValidator.validate_file_path(file_path, must_exist=False, field=field)
        if path.exists() and not path.is_file():
            raise FileValidationError(f"Path is not a file: {path}", field=field, value=file_path)
        return path


class ParameterValidator:
    """Parameter validation utilities."""

    @staticmethod
    def validate_positive_integer(value: Any, field: str, min_value: int = 1, max_value: Optional[int] = None) -> int:
        """Validate positive integer parameter."""
        if isinstance(value, bool) or not isinstance(value, int):
            try:
                value = int(value)
            except (ValueError, TypeError):
                raise ParameterValidationError(
                    f"{field} must be an integer, got {type(value).__name__}",
                    field=field,
                    value=value
                )

        if value < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {value}",
                field=field,
                value=value
            )

        if max_value is not None and value > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {value}",
                field=field,
                value=value
            )

        return value

    @staticmethod
    def validate_choice(value: Any, field: str, choices: Iterable[str]) -> str:
        """Validate a case-insensitive string option against allowed choices."""
        choices = tuple(choices)
        if not isinstance(value, str):
            raise ParameterValidationError(
                f"{field} must be a string, got {type(value).__name__}",
                field=field,
                value=value
            )

        normalized = value.strip().lower()
        if normalized not in choices:
            raise ParameterValidationError(
                f"{field} must be one of {', '.join(choices)}, got {value!r}",
                field=field,
                value=value
            )

        return normalized


# Decorators for validation
def validate_inputs(**validators):
    """
    Decorator to validate function inputs.

    Args:
        **validators: Dict mapping parameter names to validation functions
    """
    def decorator(func):
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name, validator in validators.items():
                if param_name in bound_args.arguments:
                    value = bound_args.arguments[param_name]
                    try:
                        bound_args.arguments[param_name] = validator(value)
                    except ValidationError:
                        raise
                    except Exception as e:
                        raise ParameterValidationError(
                            f"Validation failed for {param_name}: {str(e)}",
                            field=param_name,
                            value=value
                        ) from e

            return func(*bound_args.args, **bound_args.kwargs)
        return wrapper
    return decorator


def handle_exceptions(func):
    """
    Decorator that logs unexpected exceptions before they propagate.

    Validation errors are expected outcomes and pass through without a log
    entry; anything else is logged with its traceback and re-raised.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError:
            raise
        except Exception as e:
            logger = logging.getLogger(func.__module__)
            logger.error(f"Unhandled exception in {func.__name__}: {str(e)}", exc_info=True)
            raise
    return wrapper
