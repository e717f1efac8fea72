from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, computed_field
from wcmatch import glob

from repo2docx.config import DEFAULT_IGNORE_PATTERNS, IGNORE_FILE_NAME
from repo2docx.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

_LINE_BREAK = re.compile(r"\r?\n")

# `**` crosses `/`, `*` and `?` stay in one segment, and a pattern without `/`
# is matched against the final path segment.
GLOB_FLAGS = glob.GLOBSTAR | glob.MATCHBASE | glob.FORCEUNIX


def parse_ignore_file(content: str) -> list[str]:
    """Turn the content of an ignore file into a list of patterns.

    Blank lines and lines starting with `#` are discarded, remaining lines are trimmed.

    Args:
        content (str): the raw file content

    Returns:
        list[str]: the patterns, in file order
    """
    if not content:
        return []
    return [line.strip() for line in _LINE_BREAK.split(content) if line.strip() and not line.startswith("#")]


def read_local_ignore_file(path: Path) -> list[str]:
    """Read a local ignore file supplied by the caller.

    A file that cannot be read is reported and contributes no pattern.

    Args:
        path (Path): the ignore file to read

    Returns:
        list[str]: the patterns found in the file
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read local ignore file %s: %s", path, e)
        return []
    patterns = parse_ignore_file(content)
    logger.info("Read %d patterns from local ignore file %s", len(patterns), path)
    return patterns


def normalize_patterns(patterns: Iterable[str]) -> list[str]:
    """Normalize ignore patterns and drop the ones that cannot be honored.

    Backslashes become forward slashes. Negated patterns (`!foo`) are dropped since
    a re-include would make the verdict depend on pattern order. Patterns that do
    not compile are dropped as well.

    Args:
        patterns (Iterable[str]): raw patterns

    Returns:
        list[str]: the usable patterns, in input order
    """
    out: list[str] = []
    for raw in patterns:
        pattern = (raw or "").strip().replace("\\", "/")
        if not pattern or pattern.startswith("#"):
            continue
        if pattern.startswith("!"):
            logger.warning("Ignoring unsupported negated pattern %r", pattern)
            continue
        try:
            glob.translate(pattern, flags=GLOB_FLAGS)
        except ValueError as e:
            logger.warning("Ignoring invalid pattern %r: %s", pattern, e)
            continue
        out.append(pattern)
    return out


class IgnoreMatcher(BaseModel):
    """A normalized, ready-to-match list of ignore patterns."""

    model_config = ConfigDict(frozen=True)

    patterns: tuple[str, ...] = ()

    def match(self, path: str) -> bool:
        if not self.patterns:
            return False
        return glob.globmatch(path, list(self.patterns), flags=GLOB_FLAGS)


def compile_patterns(patterns: Sequence[str]) -> IgnoreMatcher:
    """Normalize patterns once so they can be matched against many paths.

    Args:
        patterns (Sequence[str]): the patterns to compile

    Returns:
        IgnoreMatcher: the compiled matcher
    """
    return IgnoreMatcher(patterns=tuple(normalize_patterns(patterns)))


def should_ignore(path: str, patterns: Sequence[str] | IgnoreMatcher) -> bool:
    """Check whether a repository-relative path matches any ignore pattern.

    A pattern matches either the full relative path or, when it has no `/`, the
    final path segment. A bare name never excludes the contents of a directory
    with that name.

    Args:
        path (str): the path relative to the repository root, with POSIX separators
        patterns (Sequence[str] | IgnoreMatcher): raw patterns or an already compiled matcher

    Returns:
        bool: True if the path is excluded
    """
    matcher = patterns if isinstance(patterns, IgnoreMatcher) else compile_patterns(patterns)
    return matcher.match(path.replace("\\", "/").lstrip("/"))


class IgnorePatternSet(BaseModel):
    """The three ignore-pattern sources, kept apart for reporting.

    Matching does not depend on the order of the sources; `patterns` concatenates
    them as defaults, repository ignore file, caller-supplied extras.
    """

    model_config = ConfigDict(frozen=True)

    defaults: tuple[str, ...] = Field(default=DEFAULT_IGNORE_PATTERNS)
    repository: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()

    @computed_field
    @property
    def patterns(self) -> list[str]:
        return [*self.defaults, *self.repository, *self.extra]

    def compile(self) -> IgnoreMatcher:
        return compile_patterns(self.patterns)

    def describe(self) -> str:
        return (
            f"Using {len(self.patterns)} ignore patterns ({len(self.defaults)} default, "
            f"{len(self.repository)} from {IGNORE_FILE_NAME}, {len(self.extra)} from options)"
        )
