"""Core data models shared across marklint components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List


class MarkerKind(Enum):
    """The four marker kinds. Values are the lowercase keywords used in rendering."""

    TAG = "tag"
    REFERENCE = "ref"
    FILE_LABEL = "file"
    DIR_LABEL = "dir"


@dataclass(frozen=True)
class Marker:
    """One matched marker occurrence."""

    kind: MarkerKind
    text: str
    source: str
    line: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError(f"Marker line numbers are 1-based, got {self.line}")

    def __str__(self) -> str:
        return f"[{self.kind.value}:{self.text}] @ {self.source}:{self.line}"


@dataclass
class Catalogue:
    """Markers found in one or more inputs, grouped by kind in discovery order."""

    tags: List[Marker] = field(default_factory=list)
    references: List[Marker] = field(default_factory=list)
    file_labels: List[Marker] = field(default_factory=list)
    dir_labels: List[Marker] = field(default_factory=list)
    skipped_lines: int = 0

    def markers(self, kind: MarkerKind) -> List[Marker]:
        """Return the list for ``kind``; raises ``KeyError`` for anything else."""
        return {
            MarkerKind.TAG: self.tags,
            MarkerKind.REFERENCE: self.references,
            MarkerKind.FILE_LABEL: self.file_labels,
            MarkerKind.DIR_LABEL: self.dir_labels,
        }[kind]

    def extend(self, other: "Catalogue") -> None:
        """Append another catalogue's markers after this one's, kind by kind."""
        self.tags.extend(other.tags)
        self.references.extend(other.references)
        self.file_labels.extend(other.file_labels)
        self.dir_labels.extend(other.dir_labels)
        self.skipped_lines += other.skipped_lines

    @classmethod
    def merge(cls, catalogues: Iterable["Catalogue"]) -> "Catalogue":
        merged = cls()
        for catalogue in catalogues:
            merged.extend(catalogue)
        return merged

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        return len(self.tags) + len(self.references) + len(self.file_labels) + len(self.dir_labels)


__all__ = ["Catalogue", "Marker", "MarkerKind"]
