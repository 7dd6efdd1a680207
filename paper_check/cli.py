"""
Command line entry point.

    paper-check ORIGINAL SUSPECT RESULT [--strategy simhash|cosine]
    paper-check --batch PAIRS.csv RESULT

Exit codes: 0 success, 1 file or comparison errors, 2 invalid arguments.
"""

import argparse
import io
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from . import __version__
from .core.checker import ComparisonResult, PlagiarismChecker
from .core.config import COSINE_UNITS, LOG_LEVELS, STRATEGIES, CheckerConfig
from .core.logging_config import setup_logging
from .core.validation import EncodingDetectionError, FileValidator, ParameterValidationError, ValidationError
from .utils.result_writer import append_result
from .utils.text_reader import decode_bytes

logger = logging.getLogger(__name__)

BATCH_COLUMNS = ("original", "suspect")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paper-check",
        description="Estimate how similar a document is to an original using SimHash fingerprints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compare one pair, append the result to result.txt
  paper-check orig.txt orig_add.txt result.txt

  # Compare every pair listed in pairs.csv (columns: original,suspect)
  paper-check --batch pairs.csv result.txt

Configuration is also read from PAPER_CHECK_* environment variables or a .env file.
        """,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="ORIGINAL SUSPECT RESULT, or only RESULT together with --batch",
    )
    parser.add_argument(
        "--batch", "-b",
        metavar="PAIRS_CSV",
        help="CSV file with 'original' and 'suspect' columns, one pair per row",
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=STRATEGIES,
        help="Scoring strategy (default: simhash, or PAPER_CHECK_STRATEGY)",
    )
    parser.add_argument(
        "--cosine-unit",
        choices=COSINE_UNITS,
        help="What the cosine strategy counts: characters or whole tokens "
             "(default: char, or PAPER_CHECK_COSINE_UNIT)",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.upper() for level in LOG_LEVELS],
        type=str.upper,
        help="Logging level (default: WARNING, or PAPER_CHECK_LOG_LEVEL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def validate_arguments(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject malformed argument combinations before any file is touched."""
    expected = 1 if args.batch else 3
    if len(args.paths) != expected:
        if args.batch:
            parser.error("--batch takes exactly one positional argument: RESULT")
        parser.error("expected exactly three arguments: ORIGINAL SUSPECT RESULT")

    names = ["result"] if args.batch else ["original", "suspect", "result"]
    for name, value in zip(names, args.paths):
        if not value.strip():
            parser.error(f"{name} path cannot be empty")
    if args.batch is not None and not args.batch.strip():
        parser.error("pairs file path cannot be empty")


def load_pairs(pairs_path: str) -> List[Tuple[str, str]]:
    """
    Read document pairs from a CSV file.

    The file is decoded like a document (BOM, UTF-8, GBK, ...), so pairs
    files saved by Chinese-locale spreadsheets load too. Relative paths are
    resolved against the directory holding the CSV.

    Raises:
        FileValidationError: If the CSV file is missing or cannot be decoded
        ParameterValidationError: If required columns are missing
    """
    path = FileValidator.validate_file_path(pairs_path, field="pairs_file")
    try:
        text, _ = decode_bytes(path.read_bytes())
    except EncodingDetectionError as e:
        raise EncodingDetectionError(f"{path}: {e.message}", field="pairs_file", value=str(path)) from e
    try:
        frame = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, skipinitialspace=True)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise ParameterValidationError(
            f"Pairs file is not valid CSV: {e}", field="pairs_file", value=str(path)
        ) from e
    frame.columns = [str(column).strip().lower() for column in frame.columns]

    missing = [column for column in BATCH_COLUMNS if column not in frame.columns]
    if missing:
        raise ParameterValidationError(
            f"Pairs file is missing columns: {', '.join(missing)}",
            field="pairs_file",
            value=str(path)
        )

    base = path.parent
    pairs = []
    for original, suspect in frame[list(BATCH_COLUMNS)].itertuples(index=False, name=None):
        pairs.append((str(_resolve(base, original)), str(_resolve(base, suspect))))
    return pairs


def _resolve(base: Path, value: str) -> Path:
    candidate = Path(value.strip())
    return candidate if candidate.is_absolute() else base / candidate


def check_pair(checker: PlagiarismChecker, original: str, suspect: str, result_path: str) -> ComparisonResult:
    """Compare one pair and append its record. Nothing is written on failure."""
    FileValidator.validate_output_path(result_path)
    started_at = datetime.now()
    result = checker.compare_files(original, suspect)
    finished_at = datetime.now()
    append_result(result_path, result, original, suspect, started_at, finished_at)
    return result


def run_single(checker: PlagiarismChecker, original: str, suspect: str, result_path: str) -> int:
    started_at = datetime.now()
    try:
        result = check_pair(checker, original, suspect, result_path)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error while processing files: {e}", file=sys.stderr)
        return 1

    elapsed_ms = int((datetime.now() - started_at).total_seconds() * 1000)
    print(f"Check complete, result appended to: {result_path}")
    print(f"Similarity: {result.percentage:.2f}% ({result.verdict.label})")
    print(f"Elapsed: {elapsed_ms} ms")
    return 0


def run_batch(checker: PlagiarismChecker, pairs_path: str, result_path: str) -> int:
    try:
        FileValidator.validate_output_path(result_path)
        pairs = load_pairs(pairs_path)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error while reading pairs file: {e}", file=sys.stderr)
        return 1

    if not pairs:
        logger.warning(f"No pairs found in {pairs_path}")
        print("No pairs to check", file=sys.stderr)
        return 0

    successful = 0
    failed = 0
    for original, suspect in tqdm(pairs, desc="Checking pairs", unit="pair", file=sys.stderr):
        try:
            result = check_pair(checker, original, suspect, result_path)
        except (ValidationError, OSError) as e:
            failed += 1
            message = e.message if isinstance(e, ValidationError) else str(e)
            tqdm.write(f"Skipped {original} <-> {suspect}: {message}", file=sys.stderr)
            continue

        successful += 1
        tqdm.write(f"{original} <-> {suspect}: {result.percentage:.2f}% ({result.verdict.key})")

    print(f"Batch complete: {successful} checked, {failed} skipped, results appended to: {result_path}")
    return 0 if failed == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_arguments(parser, args)

    try:
        config = CheckerConfig.from_env().override(
            strategy=args.strategy, cosine_unit=args.cosine_unit, log_level=args.log_level
        )
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    setup_logging(
        log_level=config.log_level,
        log_dir=config.log_dir,
        structured_logging=config.structured_logging,
        stream=sys.stderr,
    )

    checker = PlagiarismChecker(
        strategy=config.strategy,
        max_file_size_mb=config.max_file_size_mb,
        cosine_unit=config.cosine_unit,
    )
    if args.batch:
        return run_batch(checker, args.batch, args.paths[0])
    return run_single(checker, *args.paths)


if __name__ == "__main__":
    sys.exit(main())
