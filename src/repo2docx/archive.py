from __future__ import annotations

import io
import zipfile
from typing import TYPE_CHECKING

from repo2docx.config import (
    IGNORE_FILE_NAME,
    IGNORE_PROGRESS_EVERY,
    PROCESSED_PROGRESS_EVERY,
    ArchiveEntry,
    ContentClass,
    DocumentSection,
    EntryOutcome,
    Verdict,
    WalkResult,
    WalkStats,
)
from repo2docx.exceptions import FetchError
from repo2docx.file_manipulation import classify_content, decode_text, is_binary_path, split_body_lines
from repo2docx.ignore_patterns import IgnorePatternSet, parse_ignore_file, should_ignore
from repo2docx.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence


def read_archive(data: bytes, *, source: str = "<memory>") -> list[ArchiveEntry]:
    """Decompress a zip archive fully into memory.

    Args:
        data (bytes): the zip archive
        source (str): where the archive came from, used in error messages

    Raises:
        FetchError: if the bytes are not a readable zip archive

    Returns:
        list[ArchiveEntry]: the entries, in archive order
    """
    entries: list[ArchiveEntry] = []
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            for info in zf.infolist():
                if info.is_dir():
                    entries.append(ArchiveEntry(path=info.filename, is_directory=True))
                else:
                    entries.append(ArchiveEntry(path=info.filename, raw_bytes=zf.read(info)))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
        raise FetchError(url=source, message=f"Could not open repository archive from {source}: {e}") from e
    return entries


def relative_entry_path(name: str) -> str:
    """Strip the single top-level root directory (`{repo}-{branch}/`) from an entry name.

    Args:
        name (str): the entry name as stored in the archive

    Returns:
        str: the path relative to the repository root
    """
    parts = name.replace("\\", "/").lstrip("/").split("/", 1)
    return parts[1] if len(parts) == 2 else parts[0]  # noqa: PLR2004


def find_repository_ignore_file(entries: Sequence[ArchiveEntry]) -> list[str]:
    """Return the patterns of the ignore file at the archive root, if any.

    Args:
        entries (Sequence[ArchiveEntry]): the archive entries

    Returns:
        list[str]: the patterns, or an empty list when the file is absent or unreadable
    """
    for entry in entries:
        if entry.is_directory or relative_entry_path(entry.path) != IGNORE_FILE_NAME:
            continue
        try:
            patterns = parse_ignore_file(entry.raw_bytes.decode("utf-8"))
        except UnicodeDecodeError as e:
            logger.warning("Could not decode %s: %s", entry.path, e)
            return []
        logger.info("Found %s file with %d patterns", IGNORE_FILE_NAME, len(patterns))
        return patterns
    return []


def process_entry(rel: str, data: bytes) -> tuple[Verdict, DocumentSection | None]:
    """Run the content classifier on one non-ignored entry.

    Args:
        rel (str): the path relative to the repository root
        data (bytes): the raw content

    Raises:
        FileProcessingError: if the content cannot be decoded

    Returns:
        tuple[Verdict, DocumentSection | None]: the verdict and, for included files, the section
    """
    if is_binary_path(rel):
        return Verdict.SKIPPED_AS_BINARY, None
    text = decode_text(rel, data)
    if classify_content(rel, text) is ContentClass.INVALID_TEXT:
        return Verdict.SKIPPED_AS_INVALID_TEXT, None
    return Verdict.INCLUDED, DocumentSection(heading=rel, body_lines=tuple(split_body_lines(text)))


def walk_archive(entries: Sequence[ArchiveEntry], pattern_set: IgnorePatternSet) -> WalkResult:
    """Filter the archive entries and build a section for each surviving file.

    For every non-directory entry, in order: strip the root directory, apply the
    ignore patterns, the binary extension check, then decode and apply the NUL
    ratio check. A failure on one entry is logged and counted, the walk goes on.

    Args:
        entries (Sequence[ArchiveEntry]): the archive entries, in archive order
        pattern_set (IgnorePatternSet): the combined ignore patterns

    Returns:
        WalkResult: the per-entry outcomes and the accumulated counters
    """
    spec = pattern_set.compile()
    stats = WalkStats()
    outcomes: list[EntryOutcome] = []

    for entry in entries:
        if entry.is_directory:
            continue
        rel = relative_entry_path(entry.path)

        if should_ignore(rel, spec):
            stats = stats.count(Verdict.SKIPPED_BY_IGNORE)
            outcomes.append(EntryOutcome(path=rel, verdict=Verdict.SKIPPED_BY_IGNORE))
            if stats.skipped_by_ignore % IGNORE_PROGRESS_EVERY == 0:
                logger.info("Skipped %d files based on ignore patterns", stats.skipped_by_ignore)
            continue

        try:
            verdict, section = process_entry(rel, entry.raw_bytes)
        except Exception as e:
            logger.warning("Could not process file %s: %s", entry.path, e)
            stats = stats.count(Verdict.SKIPPED_BY_ERROR)
            outcomes.append(EntryOutcome(path=rel, verdict=Verdict.SKIPPED_BY_ERROR, error=str(e)))
            continue

        stats = stats.count(verdict)
        outcomes.append(EntryOutcome(path=rel, verdict=verdict, section=section))
        if verdict is Verdict.INCLUDED and stats.processed % PROCESSED_PROGRESS_EVERY == 0:
            logger.info("Processed %d files...", stats.processed)

    logger.info(
        "File processing summary",
        processed=stats.processed,
        skipped_ignore=stats.skipped_by_ignore,
        skipped_binary=stats.skipped_as_binary,
        skipped_validation=stats.skipped_as_invalid_text,
        skipped_errors=stats.skipped_by_error,
    )
    return WalkResult(outcomes=tuple(outcomes), stats=stats)
