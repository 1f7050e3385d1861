"""Core validation data structures and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence

from marklint.models import Catalogue, Marker


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a single consistency finding for one marker."""

    check: str
    marker: Marker
    detail: str

    def __str__(self) -> str:
        return f"{self.detail}: {self.marker}"


class ValidationError(RuntimeError):
    """Raised when validation fails for one or more markers."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue]) -> None:
        super().__init__(message)
        self.issues = list(issues)


@dataclass
class ValidationContext:
    """Context shared with validators: the merged catalogue and where to resolve paths."""

    root: Path
    catalogue: Catalogue


class Validator(Protocol):
    """Protocol implemented by catalogue validators."""

    name: str

    def validate(self, context: ValidationContext) -> List[ValidationIssue]:
        """Run validation and return any issues."""


def run_validators(
    context: ValidationContext, validators: Optional[Iterable[Validator]] = None
) -> List[ValidationIssue]:
    """Run each validator in turn and collect their issues in order."""
    if validators is None:
        from .checks import default_validators

        validators = default_validators()
    issues: List[ValidationIssue] = []
    for validator in validators:
        issues.extend(validator.validate(context))
    return issues


def raise_for_issues(issues: Sequence[ValidationIssue]) -> None:
    """Raise :class:`ValidationError` when ``issues`` is non-empty."""
    if issues:
        noun = "issue" if len(issues) == 1 else "issues"
        raise ValidationError(f"Found {len(issues)} marker {noun}", issues)
