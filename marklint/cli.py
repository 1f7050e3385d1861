"""CLI entrypoints for marklint commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Sequence

from .config import ConfigError, MarkerConfig, load_config
from .logging import configure_logging, get_logger
from .models import Catalogue, Marker, MarkerKind
from .patterns import InvalidPattern
from .scanner import MarkerScanner, ScanResult
from .validators import (
    DanglingReferenceValidator,
    DuplicateTagValidator,
    MissingPathValidator,
    ValidationContext,
    ValidationIssue,
    run_validators,
    unused_tags,
)

_LIST_COMMANDS = {
    "list-tags": MarkerKind.TAG,
    "list-refs": MarkerKind.REFERENCE,
    "list-files": MarkerKind.FILE_LABEL,
    "list-dirs": MarkerKind.DIR_LABEL,
}


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_scan_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p",
        "--path",
        dest="paths",
        action="append",
        default=None,
        help="Directory to scan; repeat to scan several (defaults to current directory).",
    )
    for kind in MarkerKind:
        parser.add_argument(
            f"--{kind.value}-keyword",
            dest=f"{kind.value}_keyword",
            default=None,
            help=f"Keyword for {kind.name.lower().replace('_', ' ')} markers (default: {kind.value}).",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marklint",
        description="Extract and cross-check [tag:...], [ref:...], [file:...] and [dir:...] markers.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Verify that references resolve, tags are unique and labelled paths exist.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_scan_options(check_parser)

    for command, kind in _LIST_COMMANDS.items():
        list_parser = subparsers.add_parser(
            command,
            help=f"List every {kind.name.lower().replace('_', ' ')} marker.",
        )
        _add_verbose_option(list_parser, suppress_default=True)
        _add_scan_options(list_parser)

    unused_parser = subparsers.add_parser(
        "list-unused",
        help="List tags that no reference points at.",
    )
    _add_verbose_option(unused_parser, suppress_default=True)
    _add_scan_options(unused_parser)

    return parser


def _resolve_config(args: argparse.Namespace, root: Path) -> MarkerConfig:
    config = load_config(root)
    for kind in MarkerKind:
        override = getattr(args, f"{kind.value}_keyword", None)
        if override:
            config.keywords[kind] = override
    return config


def _scan(args: argparse.Namespace) -> List[ScanResult]:
    results: List[ScanResult] = []
    for raw_path in args.paths or ["."]:
        root = Path(raw_path)
        config = _resolve_config(args, root)
        scanner = MarkerScanner(
            config.patterns(),
            encoding=config.encoding,
            workers=config.workers,
            exclude_paths=config.exclude_paths,
        )
        results.append(scanner.scan(root))
    return results


def _check(results: Sequence[ScanResult]) -> List[ValidationIssue]:
    merged = Catalogue.merge(result.catalogue for result in results)
    issues = run_validators(
        ValidationContext(root=Path.cwd(), catalogue=merged),
        [DuplicateTagValidator(), DanglingReferenceValidator()],
    )
    # Labelled paths are resolved against the root they were found under.
    for result in results:
        issues.extend(
            MissingPathValidator().validate(
                ValidationContext(root=result.root, catalogue=result.catalogue)
            )
        )
    return issues


def _print_markers(markers: Sequence[Marker]) -> None:
    for marker in markers:
        print(marker)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for marklint commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        results = _scan(args)
    except (InvalidPattern, ConfigError) as exc:
        parser.exit(2, f"marklint: {exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    catalogue = Catalogue.merge(result.catalogue for result in results)

    if args.command == "check":
        issues = _check(results)
        if issues:
            for issue in issues:
                print(issue, file=sys.stderr)
            logger.debug("Check failed with %d issues", len(issues))
            parser.exit(1)
        print(
            f"Checked {len(catalogue.tags)} tags, {len(catalogue.references)} refs, "
            f"{len(catalogue.file_labels)} file labels, and {len(catalogue.dir_labels)} dir labels."
        )
    elif args.command in _LIST_COMMANDS:
        _print_markers(catalogue.markers(_LIST_COMMANDS[args.command]))
    elif args.command == "list-unused":
        _print_markers(unused_tags(catalogue))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
