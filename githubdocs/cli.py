"""Command-line front door for githubdocs.

Parses CLI options, merges them over the user config, and loads rule files.
Then runs one generation and writes the result to stdout or a file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .document import HighlightConfig
from .errors import GithubDocsError
from .generate import OUTPUT_FORMATS, GenerationRequest, generate
from .github import GitHubClient
from .ignore import Rule, default_path_rules, load_rules_file


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _depth_int(value: str) -> int:
    """argparse type for depth bounds: ``-1`` (unlimited) or ``>= 0``."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < -1:
        raise argparse.ArgumentTypeError("value must be -1 (unlimited) or >= 0")
    return parsed


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="githubdocs",
        description="Render a GitHub repository's tree and file contents as one Markdown document.",
    )
    parser.add_argument("url", help="GitHub repository URL, e.g. https://github.com/owner/repo.")
    parser.add_argument("--branch", default=None, help="Branch, tag, or commit (default: repository default branch).")
    parser.add_argument("--ignore-file", type=Path, default=None, help="Path rules file (gitignore-style).")
    parser.add_argument(
        "--source-ignore-file",
        type=Path,
        default=None,
        help="Line rules file; matching content lines are dropped.",
    )
    parser.add_argument(
        "--no-default-ignore",
        action="store_true",
        help="Do not apply built-in path rules when no ignore file is given.",
    )
    parser.add_argument(
        "--max-depth",
        type=_depth_int,
        default=None,
        help="Maximum path depth in segments; -1 for unlimited.",
    )
    parser.add_argument("--workers", type=_positive_int, default=None, help="Concurrent file fetches.")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="markdown", help="Output format.")
    parser.add_argument(
        "--file",
        dest="file_path",
        default=None,
        metavar="PATH",
        help="Render only this repository file, with line rules applied.",
    )
    parser.add_argument("--style", default="default", help="Pygments style name for --format html.")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write output to PATH instead of stdout.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity.")
    return parser


def resolve_path_rules(args: argparse.Namespace, settings: config.Settings) -> list[Rule]:
    """CLI file, then config file, then built-in defaults unless disabled."""
    rules_path = args.ignore_file or settings.ignore_file
    if rules_path is not None:
        return load_rules_file(rules_path)
    if args.no_default_ignore:
        return []
    return default_path_rules()


def resolve_line_rules(args: argparse.Namespace, settings: config.Settings) -> list[Rule]:
    rules_path = args.source_ignore_file or settings.source_ignore_file
    if rules_path is None:
        return []
    return load_rules_file(rules_path)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run one generation, and emit the rendered output.

    Any ``GithubDocsError`` becomes a ``SystemExit`` with a one-line message.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    settings = config.load_settings()

    try:
        request = GenerationRequest(
            repo_url=args.url,
            branch=args.branch,
            path_rules=tuple(resolve_path_rules(args, settings)),
            line_rules=tuple(resolve_line_rules(args, settings)),
            max_depth=args.max_depth if args.max_depth is not None else settings.max_depth,
            max_workers=args.workers if args.workers is not None else settings.max_workers,
            output_format=args.format,
            highlight=HighlightConfig(style=args.style),
            file_path=args.file_path,
        )
        with GitHubClient(config.github_token(), timeout=settings.timeout) as client:
            result = generate(request, client)
    except GithubDocsError as exc:
        raise SystemExit(f"githubdocs: {exc}") from exc

    if args.output is None:
        sys.stdout.write(result.output)
        return
    try:
        args.output.write_text(result.output, encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"githubdocs: cannot write {args.output}: {exc}") from exc


if __name__ == "__main__":
    main()
