from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

WORD_LENGTH = 5
COMMENT_PREFIX = "#"


class WordListError(Exception):
    pass


@dataclass(frozen=True)
class ValidationIssue:
    line_number: int
    reason: str
    value: str | None = None


@dataclass(frozen=True)
class WordListValidationResult:
    words: list[str]
    issues: list[ValidationIssue]

    @property
    def invalid_count(self) -> int:
        return len(self.issues)


def validate_word_lines(lines: Iterable[str]) -> WordListValidationResult:
    """Normalize raw lines to uppercase five-letter words.

    Blank lines and ``#`` comments are skipped; anything else that is not a
    new five-letter word is reported with its 1-based line number.
    """
    words: list[str] = []
    issues: list[ValidationIssue] = []
    seen: dict[str, int] = {}

    for line_number, raw_line in enumerate(lines, start=1):
        stripped = raw_line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue

        word = stripped.upper()
        if len(word) != WORD_LENGTH:
            issues.append(ValidationIssue(line_number=line_number, reason="word_length", value=_truncate(word)))
            continue
        if not word.isalpha():
            issues.append(ValidationIssue(line_number=line_number, reason="invalid_charset", value=word))
            continue
        if word in seen:
            issues.append(
                ValidationIssue(
                    line_number=line_number,
                    reason="duplicate_word",
                    value=f"{word} (first seen on line {seen[word]})",
                )
            )
            continue

        seen[word] = line_number
        words.append(word)

    return WordListValidationResult(words=words, issues=issues)


def load_word_list(path: Path | str) -> WordListValidationResult:
    word_path = Path(path)
    try:
        with word_path.open("r", encoding="utf-8") as file_obj:
            return validate_word_lines(file_obj)
    except FileNotFoundError:
        raise WordListError(f"word list not found: {word_path}") from None
    except UnicodeDecodeError as exc:
        raise WordListError(f"word list is not valid UTF-8: {word_path} ({exc.reason})") from None


@lru_cache(maxsize=4)
def load_words(path: str) -> tuple[str, ...]:
    """Cached valid words for ``path``; invalid lines are dropped."""
    return tuple(load_word_list(path).words)


def _truncate(value: str, max_length: int = 40) -> str:
    if len(value) <= max_length:
        return value

    return f"{value[: max_length - 3]}..."


__all__ = [
    "ValidationIssue",
    "WordListError",
    "WordListValidationResult",
    "load_word_list",
    "load_words",
    "validate_word_lines",
]
