"""Cross-reference checks over a merged marker catalogue."""

from __future__ import annotations

from typing import Dict, List, Set

from marklint.models import Catalogue, Marker

from .base import ValidationContext, ValidationIssue, Validator


class DuplicateTagValidator:
    """Flags every tag declared after the first with the same text."""

    name = "duplicate_tag"

    def validate(self, context: ValidationContext) -> List[ValidationIssue]:
        first_seen: Dict[str, Marker] = {}
        issues: List[ValidationIssue] = []
        for tag in context.catalogue.tags:
            original = first_seen.setdefault(tag.text, tag)
            if original is tag:
                continue
            issues.append(
                ValidationIssue(
                    check=self.name,
                    marker=tag,
                    detail=f"Duplicate tag (first declared at {original.source}:{original.line})",
                )
            )
        return issues


class DanglingReferenceValidator:
    """Flags references whose text matches no tag."""

    name = "dangling_reference"

    def validate(self, context: ValidationContext) -> List[ValidationIssue]:
        tags = {tag.text for tag in context.catalogue.tags}
        return [
            ValidationIssue(check=self.name, marker=ref, detail="No tag found for reference")
            for ref in context.catalogue.references
            if ref.text not in tags
        ]


class MissingPathValidator:
    """Flags file and directory labels that do not name an existing path."""

    name = "missing_path"

    def validate(self, context: ValidationContext) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        for marker in context.catalogue.file_labels:
            if not (context.root / marker.text).is_file():
                issues.append(
                    ValidationIssue(check=self.name, marker=marker, detail="File does not exist")
                )
        for marker in context.catalogue.dir_labels:
            if not (context.root / marker.text).is_dir():
                issues.append(
                    ValidationIssue(check=self.name, marker=marker, detail="Directory does not exist")
                )
        return issues


def default_validators() -> List[Validator]:
    return [DuplicateTagValidator(), DanglingReferenceValidator(), MissingPathValidator()]


def unused_tags(catalogue: Catalogue) -> List[Marker]:
    """Return tags that no reference points at, in discovery order."""
    referenced: Set[str] = {ref.text for ref in catalogue.references}
    return [tag for tag in catalogue.tags if tag.text not in referenced]
