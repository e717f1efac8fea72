"""
repo2docx — Turn a GitHub repository into a single DOCX document.

Overview
--------
The repository's branch archive is downloaded, every file that survives the
ignore patterns and the binary/text checks becomes a heading (its path) followed
by one paragraph per line, and the whole is written as one `.docx` file.

Ignore patterns come from three sources:
    - built-in defaults (VCS metadata, dependency caches, build output, logs, ...),
    - a `.docxignore` file at the repository root,
    - a local ignore file given with `-i/--ignore`.

Usage
-----
    repo2docx microsoft/vscode
    repo2docx https://github.com/microsoft/vscode -o vscode-docs.docx
    repo2docx microsoft/vscode -b development -t <your-token>
    repo2docx microsoft/vscode -i ./.docxignore
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from repo2docx import __version__
from repo2docx.config import DEFAULT_BRANCH, TOKEN_ENV_VAR
from repo2docx.converter import convert_repository
from repo2docx.exceptions import Repo2DocxError
from repo2docx.github_client import DEFAULT_TIMEOUT
from repo2docx.ignore_patterns import read_local_ignore_file
from repo2docx.logging import logger, setup_logging
from repo2docx.settings import Settings, load_env

if TYPE_CHECKING:
    from collections.abc import Sequence

_EPILOG = """\
examples:
  repo2docx microsoft/vscode
  repo2docx https://github.com/microsoft/vscode
  repo2docx microsoft/vscode -o vscode-docs.docx
  repo2docx microsoft/vscode -b development -t <your-token>
  repo2docx microsoft/vscode -i ./.docxignore

notes:
  - a .docxignore file at the repository root is used automatically
  - a local .docxignore file can be added with -i/--ignore
  - common non-source files (node_modules, .git, ...) are ignored by default
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="repo2docx",
        description="Convert a GitHub repository into a single DOCX document.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "repository",
        nargs="?",
        help="GitHub repository URL or owner/repo (e.g. microsoft/vscode).",
    )
    p.add_argument("-o", "--output", type=str, default=None, help="Output file path (default: <owner>-<repo>.docx).")
    p.add_argument("-b", "--branch", type=str, default=DEFAULT_BRANCH, help="Repository branch (default: main).")
    p.add_argument(
        "-t",
        "--token",
        type=str,
        default=None,
        help=f"GitHub personal access token (default: ${TOKEN_ENV_VAR}).",
    )
    p.add_argument("-i", "--ignore", type=str, default=None, help="Path to a local .docxignore file.")
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="HTTP timeout in seconds.")
    p.add_argument("-v", "--version", action="version", version=f"repo2docx v{__version__}")
    return p


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse command-line arguments into settings.

    Without a repository argument the help is printed and the process exits with 0.

    Args:
        argv (Sequence[str] | None): arguments, defaults to `sys.argv[1:]`

    Returns:
        Settings: the run configuration
    """
    p = build_parser()
    args = p.parse_args(argv)
    if not args.repository:
        p.print_help()
        raise SystemExit(0)

    values = {
        "repository": args.repository,
        "output": args.output,
        "branch": args.branch,
        "ignore_file": args.ignore,
        "log_file": args.log_file,
        "timeout": args.timeout,
    }
    if args.token:
        values["token"] = args.token
    return Settings(**values)


def main(argv: Sequence[str] | None = None) -> int:
    load_env()
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    ignore_paths = read_local_ignore_file(settings.ignore_file) if settings.ignore_file else []

    logger.info("Converting GitHub repository %s to DOCX...", settings.repository)
    try:
        out_path = convert_repository(
            settings.repository,
            settings.output,
            token=settings.token,
            branch=settings.branch,
            ignore_paths=ignore_paths,
            timeout=settings.timeout,
        )
    except Repo2DocxError as e:
        logger.error("Conversion failed", error=str(e), kind=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"DOCX file created at: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
