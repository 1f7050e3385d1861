"""Repository traversal and per-file marker extraction."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .extractor import extract_file
from .logging import get_logger
from .models import Catalogue
from .patterns import MarkerPatterns, default_patterns

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


@dataclass(frozen=True)
class _IgnoreRule:
    """One gitignore-style pattern from .gitignore or ``exclude_paths``."""

    pattern: str
    directory_only: bool = False
    anchored: bool = False
    negate: bool = False

    @classmethod
    def parse(cls, line: str, *, allow_negation: bool = True) -> Optional["_IgnoreRule"]:
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negate = allow_negation and text.startswith("!")
        if negate:
            text = text[1:]
        directory_only = text.endswith("/")
        anchored = text.startswith("/")
        text = text.strip("/")
        if not text:
            return None
        return cls(text, directory_only=directory_only, anchored=anchored, negate=negate)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        # A pattern with no slash matches any single path component.
        if not self.anchored and "/" not in self.pattern:
            return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))
        return fnmatchcase(rel_path, self.pattern)


def _load_rules(root: Path, exclude_paths: Sequence[str]) -> List[_IgnoreRule]:
    lines: List[str] = []
    gitignore = root / ".gitignore"
    if gitignore.is_file():
        lines = gitignore.read_text(encoding="utf-8", errors="replace").splitlines()

    rules = [rule for rule in map(_IgnoreRule.parse, lines) if rule is not None]
    for pattern in exclude_paths:
        rule = _IgnoreRule.parse(pattern, allow_negation=False)
        if rule is not None:
            rules.append(rule)
    return rules


def _is_ignored(rel_path: str, is_dir: bool, rules: Sequence[_IgnoreRule]) -> bool:
    # Last matching rule wins, as in git.
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _walk_files(root: Path, rules: Sequence[_IgnoreRule]) -> Iterator[str]:
    """Yield POSIX paths, relative to ``root``, of every file not ignored."""
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        dirnames[:] = [
            name
            for name in dirnames
            if name not in _EXCLUDED_DIRS and not _is_ignored(prefix + name, True, rules)
        ]
        for filename in filenames:
            if filename not in _EXCLUDED_FILES and not _is_ignored(prefix + filename, False, rules):
                yield prefix + filename


@dataclass
class ScanResult:
    """Merged markers for one scanned root."""

    root: Path
    catalogue: Catalogue
    files_scanned: int


class MarkerScanner:
    """Walks a repository and extracts markers from every file."""

    def __init__(
        self,
        patterns: Optional[MarkerPatterns] = None,
        *,
        encoding: str = "utf-8",
        workers: Optional[int] = None,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.patterns = patterns or default_patterns()
        self.encoding = encoding
        self.workers = workers
        self.exclude_paths = list(exclude_paths)
        self.logger = get_logger("scanner")

    def scan(self, root: str | Path) -> ScanResult:
        """Return the merged catalogue of every file under ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        rules = _load_rules(root_path, self.exclude_paths)
        sources = sorted(_walk_files(root_path, rules))
        self.logger.debug("Scanning %d files under %s", len(sources), root_path)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            results = list(executor.map(lambda source: self._scan_file(root_path, source), sources))

        catalogue = Catalogue.merge(result for result in results if result is not None)
        scanned = sum(1 for result in results if result is not None)
        self.logger.info(
            "Found %d markers in %d files under %s", len(catalogue), scanned, root_path
        )
        return ScanResult(root=root_path, catalogue=catalogue, files_scanned=scanned)

    def _scan_file(self, root: Path, source: str) -> Catalogue | None:
        try:
            catalogue = extract_file(
                self.patterns, root / source, source=source, encoding=self.encoding
            )
        except OSError as exc:
            self.logger.warning("Skipping unreadable file %s: %s", source, exc)
            return None
        if catalogue.skipped_lines:
            self.logger.debug(
                "Skipped %d undecodable lines in %s", catalogue.skipped_lines, source
            )
        return catalogue


__all__ = ["MarkerScanner", "ScanResult"]
