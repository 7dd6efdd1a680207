"""
Human-readable result records, appended to a result file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Union

from ..core.validation import FileValidator, handle_exceptions

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

RECORD_SEPARATOR = (
    "\n========================================\n"
    "========== New check record ============\n"
    "========================================\n\n"
)


def render_record(result,
                  original_path: Union[str, Path],
                  suspect_path: Union[str, Path],
                  started_at: datetime,
                  finished_at: datetime) -> str:
    """
    Format one comparison as text.

    Args:
        result: ComparisonResult to report
        original_path: Path of the original document
        suspect_path: Path of the document being checked
        started_at: When the check started
        finished_at: When the check finished
    """
    elapsed_ms = int((finished_at - started_at).total_seconds() * 1000)

    lines = [
        "====== Text similarity check result ======",
        f"Started: {started_at.strftime(TIMESTAMP_FORMAT)}",
        f"Finished: {finished_at.strftime(TIMESTAMP_FORMAT)}",
        f"Elapsed: {elapsed_ms} ms",
        "",
        "Compared files:",
        f"  Original: {original_path}",
        f"  Suspect: {suspect_path}",
        "",
        f"Strategy: {result.strategy}",
    ]
    if result.cosine_unit is not None:
        lines.append(f"Cosine unit: {result.cosine_unit}")
    if result.distance is not None:
        lines.append(f"Hamming distance: {result.distance}")
    lines.extend([
        f"Similarity: {result.percentage:.2f}%",
        "",
        f"Verdict: {result.verdict.label}",
    ])
    return "\n".join(lines) + "\n"


@handle_exceptions
def append_result(result_path: Union[str, Path],
                  result,
                  original_path: Union[str, Path],
                  suspect_path: Union[str, Path],
                  started_at: datetime,
                  finished_at: datetime) -> Path:
    """
    Append a result record, keeping earlier records in the file.

    The record is rendered before the file is opened and written in a
    single call, so a failure cannot leave half a record behind.

    Returns:
        Path of the result file
    """
    path = FileValidator.validate_output_path(result_path)
    record = render_record(result, original_path, suspect_path, started_at, finished_at)

    if path.exists() and path.stat().st_size > 0:
        record = RECORD_SEPARATOR + record

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(record)

    logger.info(f"Appended result to {path}", extra={'file_path': str(path)})
    return path
