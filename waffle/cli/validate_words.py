from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import structlog

from waffle.core.config import get_settings
from waffle.core.logging import configure_logging
from waffle.core.word_list import ValidationIssue, WordListError, load_word_list

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate a five-letter word list")
    parser.add_argument("--words", default=None, help="Path to the word list (defaults to WORDS_PATH)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    configure_logging(args.log_level, json_logs=False)

    words_path = Path(args.words) if args.words else get_settings().words_path
    try:
        result = load_word_list(words_path)
    except WordListError as exc:
        logger.error("word_list_unavailable", error=str(exc))
        return 1

    for issue in result.issues:
        _log_validation_issue(issue)

    logger.info(
        "word_list_summary",
        words_path=str(words_path),
        valid_count=len(result.words),
        invalid_count=result.invalid_count,
    )
    return 1 if result.invalid_count > 0 else 0


def _log_validation_issue(issue: ValidationIssue) -> None:
    event_payload: dict[str, Any] = {
        "line_number": issue.line_number,
        "reason": issue.reason,
    }
    if issue.value is not None:
        event_payload["value"] = issue.value

    logger.error("word_list_validation_error", **event_payload)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    return run(parser.parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
