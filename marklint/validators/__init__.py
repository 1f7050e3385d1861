"""Validation package for marker catalogues."""

from .base import (
    ValidationContext,
    ValidationError,
    ValidationIssue,
    Validator,
    raise_for_issues,
    run_validators,
)
from .checks import (
    DanglingReferenceValidator,
    DuplicateTagValidator,
    MissingPathValidator,
    default_validators,
    unused_tags,
)

__all__ = [
    "ValidationContext",
    "ValidationIssue",
    "Validator",
    "ValidationError",
    "raise_for_issues",
    "run_validators",
    "DanglingReferenceValidator",
    "DuplicateTagValidator",
    "MissingPathValidator",
    "default_validators",
    "unused_tags",
]
