"""Marker extraction from line-oriented text."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, List, Optional, Pattern, Tuple

from .models import Catalogue, Marker, MarkerKind
from .patterns import MarkerPatterns


def extract(
    tag_pattern: Pattern[str],
    ref_pattern: Pattern[str],
    file_pattern: Pattern[str],
    dir_pattern: Pattern[str],
    source: str,
    lines: Iterable[Optional[str]],
) -> Catalogue:
    """Return every marker found in ``lines``, grouped by kind.

    ``lines`` yields one item per physical line: the decoded text, or ``None``
    when the line could not be decoded. Undecodable lines still advance the
    line counter but contribute no markers. Each pattern is applied to the
    full text of every line, so kinds never compete for the same characters.
    """
    catalogue = Catalogue()
    targets: Tuple[Tuple[MarkerKind, Pattern[str], List[Marker]], ...] = (
        (MarkerKind.TAG, tag_pattern, catalogue.tags),
        (MarkerKind.REFERENCE, ref_pattern, catalogue.references),
        (MarkerKind.FILE_LABEL, file_pattern, catalogue.file_labels),
        (MarkerKind.DIR_LABEL, dir_pattern, catalogue.dir_labels),
    )

    for line_number, line in enumerate(lines, start=1):
        if line is None:
            catalogue.skipped_lines += 1
            continue
        for kind, pattern, found in targets:
            for match in pattern.finditer(line):
                found.append(
                    Marker(kind=kind, text=match.group(1), source=source, line=line_number)
                )

    return catalogue


def extract_markers(
    patterns: MarkerPatterns, source: str, lines: Iterable[Optional[str]]
) -> Catalogue:
    """Run :func:`extract` with a :class:`MarkerPatterns` bundle."""
    return extract(patterns.tag, patterns.ref, patterns.file, patterns.dir, source, lines)


def iter_lines(handle: BinaryIO, encoding: str = "utf-8") -> Iterator[Optional[str]]:
    """Yield each physical line of ``handle`` decoded, or ``None`` if it fails to decode."""
    for raw in handle:
        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        try:
            yield raw.decode(encoding)
        except UnicodeDecodeError:
            yield None


def extract_file(
    patterns: MarkerPatterns,
    path: Path,
    *,
    source: Optional[str] = None,
    encoding: str = "utf-8",
) -> Catalogue:
    """Extract markers from the file at ``path``.

    Raises ``OSError`` if the file cannot be opened; decoding problems never
    raise.
    """
    with Path(path).open("rb") as handle:
        return extract_markers(
            patterns,
            source if source is not None else str(path),
            iter_lines(handle, encoding),
        )


__all__ = ["extract", "extract_file", "extract_markers", "iter_lines"]
