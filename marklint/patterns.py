"""Construction of the regular expressions that recognise markers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Pattern

from .models import MarkerKind

DEFAULT_KEYWORDS: Dict[MarkerKind, str] = {kind: kind.value for kind in MarkerKind}

_FORBIDDEN_KEYWORD_CHARS = frozenset(":[]")
_PATTERN_TEMPLATE = r"\[\s*{keyword}\s*:\s*([^\]\s]+)\s*\]"


class InvalidPattern(ValueError):
    """Raised when a marker pattern cannot be built from its definition."""


def build_pattern(keyword: str) -> Pattern[str]:
    """Compile the case-insensitive marker grammar for ``keyword``.

    The keyword is matched literally. The single capture group is the label
    text: one or more characters that are neither ``]`` nor whitespace.
    """
    if not keyword:
        raise InvalidPattern("Marker keyword must not be empty")
    if any(char.isspace() or char in _FORBIDDEN_KEYWORD_CHARS for char in keyword):
        raise InvalidPattern(
            f"Marker keyword {keyword!r} must not contain whitespace, ':', '[' or ']'"
        )
    return re.compile(_PATTERN_TEMPLATE.format(keyword=re.escape(keyword)), re.IGNORECASE)


def compile_pattern(expression: str) -> Pattern[str]:
    """Compile a caller-supplied expression with exactly one capture group."""
    try:
        pattern = re.compile(expression)
    except re.error as exc:
        raise InvalidPattern(f"Invalid marker pattern {expression!r}: {exc}") from exc
    if pattern.groups != 1:
        raise InvalidPattern(
            f"Marker pattern {expression!r} must have exactly one capture group, "
            f"found {pattern.groups}"
        )
    return pattern


@dataclass(frozen=True)
class MarkerPatterns:
    """The four compiled patterns, one per marker kind."""

    tag: Pattern[str]
    ref: Pattern[str]
    file: Pattern[str]
    dir: Pattern[str]

    @classmethod
    def from_keywords(
        cls,
        tag: Optional[str] = None,
        ref: Optional[str] = None,
        file: Optional[str] = None,
        dir: Optional[str] = None,
    ) -> "MarkerPatterns":
        return cls(
            tag=build_pattern(tag or DEFAULT_KEYWORDS[MarkerKind.TAG]),
            ref=build_pattern(ref or DEFAULT_KEYWORDS[MarkerKind.REFERENCE]),
            file=build_pattern(file or DEFAULT_KEYWORDS[MarkerKind.FILE_LABEL]),
            dir=build_pattern(dir or DEFAULT_KEYWORDS[MarkerKind.DIR_LABEL]),
        )

    @classmethod
    def from_mapping(cls, keywords: Mapping[MarkerKind, str]) -> "MarkerPatterns":
        return cls.from_keywords(
            tag=keywords.get(MarkerKind.TAG),
            ref=keywords.get(MarkerKind.REFERENCE),
            file=keywords.get(MarkerKind.FILE_LABEL),
            dir=keywords.get(MarkerKind.DIR_LABEL),
        )

    def for_kind(self, kind: MarkerKind) -> Pattern[str]:
        return {
            MarkerKind.TAG: self.tag,
            MarkerKind.REFERENCE: self.ref,
            MarkerKind.FILE_LABEL: self.file,
            MarkerKind.DIR_LABEL: self.dir,
        }[kind]


def default_patterns() -> MarkerPatterns:
    """Return patterns for the standard ``tag``/``ref``/``file``/``dir`` keywords."""
    return MarkerPatterns.from_keywords()


__all__ = [
    "DEFAULT_KEYWORDS",
    "InvalidPattern",
    "MarkerPatterns",
    "build_pattern",
    "compile_pattern",
    "default_patterns",
]
