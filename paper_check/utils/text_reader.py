"""
Reading documents from disk with encoding detection.
"""

import codecs
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

import chardet

from ..core.validation import EncodingDetectionError, FileValidator, handle_exceptions

logger = logging.getLogger(__name__)

# Tried in order; chardet's guess goes in before the single-byte fallback
# because ISO-8859-1 decodes any byte string.
DEFAULT_ENCODINGS = ("utf-8", "gbk", "gb2312", "iso-8859-1", "utf-16")
SINGLE_BYTE_FALLBACKS = {"latin_1", "iso8859-1", "iso-8859-1"}
MIN_DETECTION_CONFIDENCE = 0.5

_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _canonical(encoding: str) -> Optional[str]:
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        return None


def detect_encoding(data: bytes) -> Optional[str]:
    """Best chardet guess for ``data``, or None when it is not confident."""
    result = chardet.detect(data)
    encoding = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    if encoding and confidence >= MIN_DETECTION_CONFIDENCE:
        logger.debug(f"chardet guessed {encoding} ({confidence:.2f})")
        return encoding
    return None


def _candidates(data: bytes, encodings: Sequence[str], detect: bool) -> Iterable[str]:
    ordered = list(encodings)
    if detect:
        guess = detect_encoding(data)
        if guess:
            position = next(
                (i for i, name in enumerate(ordered) if _canonical(name) in SINGLE_BYTE_FALLBACKS),
                len(ordered)
            )
            ordered.insert(position, guess)

    seen = set()
    for name in ordered:
        key = _canonical(name) or name
        if key not in seen:
            seen.add(key)
            yield name


def decode_bytes(data: bytes,
                 encodings: Sequence[str] = DEFAULT_ENCODINGS,
                 detect: bool = True) -> Tuple[str, str]:
    """
    Decode raw document bytes.

    A byte order mark wins outright, and data that contradicts its own mark
    is rejected. Otherwise each candidate encoding is tried in order and the
    first strict decode is returned.

    Returns:
        Tuple of (text, encoding used)

    Raises:
        EncodingDetectionError: If no candidate can decode the data, or the
            data is invalid in the encoding its byte order mark names
    """
    if not data:
        return "", "utf-8"

    for bom, encoding in _BOMS:
        if data.startswith(bom):
            try:
                return data.decode(encoding), encoding
            except UnicodeDecodeError as e:
                raise EncodingDetectionError(
                    f"Data starts with a {encoding} byte order mark but is not valid {encoding}: {e.reason}",
                    field="encoding",
                    value=encoding
                ) from e

    for encoding in _candidates(data, encodings, detect):
        try:
            return data.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            continue

    raise EncodingDetectionError(
        f"Could not decode data with any of: {', '.join(encodings)}. Save the file as UTF-8 and retry",
        field="encoding",
        value=list(encodings)
    )


@handle_exceptions
def read_text_file(file_path: Union[str, Path],
                   encodings: Sequence[str] = DEFAULT_ENCODINGS,
                   max_size_mb: Optional[float] = None,
                   detect: bool = True,
                   field: str = "file_path") -> str:
    """
    Read a document as text.

    Args:
        file_path: Document path
        encodings: Candidate encodings, in order of preference
        max_size_mb: Size limit, FileValidator.MAX_FILE_SIZE_MB by default
        detect: Whether to consult chardet
        field: Name reported in validation errors

    Raises:
        FileValidationError: If the path is invalid
        EncodingDetectionError: If the file cannot be decoded
    """
    path = FileValidator.validate_text_file(file_path, max_size_mb=max_size_mb, field=field)
    try:
        text, encoding = decode_bytes(path.read_bytes(), encodings, detect)
    except EncodingDetectionError as e:
        raise EncodingDetectionError(f"{path}: {e.message}", field=field, value=str(path)) from e

    logger.info(f"Read {path.name} as {encoding} ({len(text)} characters)", extra={'file_path': str(path)})
    return text
