from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from repo2docx.archive import find_repository_ignore_file, read_archive, walk_archive
from repo2docx.config import DEFAULT_BRANCH, WalkResult
from repo2docx.github_client import DEFAULT_TIMEOUT, check_repository_access, download_archive
from repo2docx.identifier import parse_repo_identifier
from repo2docx.ignore_patterns import IgnorePatternSet
from repo2docx.logging import logger, run_context
from repo2docx.output_construction import build_document, save_document

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repo2docx.config import RepositoryRef


def convert_archive(
    ref: RepositoryRef,
    branch: str,
    archive: bytes,
    output_path: Path,
    *,
    ignore_paths: Sequence[str] = (),
) -> WalkResult:
    """Turn an already downloaded archive into the output document.

    Args:
        ref (RepositoryRef): the repository the archive belongs to
        branch (str): the downloaded branch
        archive (bytes): the zip archive
        output_path (Path): where to write the document
        ignore_paths (Sequence[str]): extra ignore patterns supplied by the caller

    Returns:
        WalkResult: the outcome of the walk, for reporting
    """
    logger.info("Extracting repository archive...")
    entries = read_archive(archive, source=ref.archive_url(branch))

    pattern_set = IgnorePatternSet(
        repository=tuple(find_repository_ignore_file(entries)),
        extra=tuple(ignore_paths),
    )
    logger.info(pattern_set.describe())

    logger.info("Processing repository files...")
    result = walk_archive(entries, pattern_set)

    document = build_document(ref, branch, result.sections)
    save_document(document, output_path)
    return result


def convert_repository(
    identifier: str,
    output_path: str | Path | None = None,
    *,
    token: str | None = None,
    branch: str = DEFAULT_BRANCH,
    ignore_paths: Sequence[str] = (),
    timeout: float = DEFAULT_TIMEOUT,
) -> Path:
    """Download a GitHub repository and flatten it into a single DOCX document.

    Args:
        identifier (str): GitHub URL or `owner/repo`
        output_path (str | Path | None): destination; defaults to `<owner>-<repo>.docx`
        token (str | None): personal access token for private repositories
        branch (str): branch to download
        ignore_paths (Sequence[str]): extra ignore patterns
        timeout (float): HTTP timeout in seconds

    Raises:
        InvalidIdentifierError: if `identifier` cannot be parsed
        RepositoryAccessError: if the repository or branch cannot be accessed
        FetchError: if the archive cannot be downloaded or opened
        SerializationError: if the document cannot be built
        WriteError: if the document cannot be written

    Returns:
        Path: the path of the written document
    """
    ref = parse_repo_identifier(identifier)
    out = Path(output_path) if output_path else Path(ref.default_output_name)
    token = token or None

    with run_context(repository=ref.full_name, branch=branch):
        check_repository_access(ref, branch, token)
        archive = download_archive(ref, branch, token, timeout=timeout)
        convert_archive(ref, branch, archive, out, ignore_paths=ignore_paths)
    return out
