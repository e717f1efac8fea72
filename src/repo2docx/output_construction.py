from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import docx
from docx.enum.text import WD_UNDERLINE
from docx.shared import Twips

from repo2docx.config import SEPARATOR_LINE
from repo2docx.exceptions import SerializationError, WriteError
from repo2docx.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docx.document import Document
    from docx.text.paragraph import Paragraph

    from repo2docx.config import DocumentSection, RepositoryRef

DOCUMENT_CREATOR = "repo2docx"

# C0 controls other than tab/LF/CR, plus the two non-characters, are rejected by the XML writer.
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def now_iso() -> str:
    """Return the current date and time in ISO 8601 format with timezone.

    Returns:
        str: the current date and time in ISO 8601 format with timezone
    """
    return datetime.now(UTC).astimezone().isoformat(timespec="seconds")


def xml_safe(text: str) -> str:
    return _XML_ILLEGAL.sub("", text)


def _spaced(paragraph: Paragraph, *, before: int | None = None, after: int | None = None) -> Paragraph:
    fmt = paragraph.paragraph_format
    if before is not None:
        fmt.space_before = Twips(before)
    if after is not None:
        fmt.space_after = Twips(after)
    return paragraph


def add_title(document: Document, ref: RepositoryRef, branch: str, generated_at: str) -> None:
    """Write the title block: repository, branch and generation timestamp."""
    _spaced(document.add_heading(f"Repository: {ref.full_name}", level=1), after=400)
    _spaced(document.add_paragraph(f"Branch: {branch}"), after=200)
    _spaced(document.add_paragraph(f"Generated on: {generated_at}"), after=800)


def add_section(document: Document, section: DocumentSection) -> None:
    """Write one file: a bold, underlined heading, one paragraph per line, then a separator."""
    heading = _spaced(document.add_heading(level=2), before=400, after=200)
    run = heading.add_run(xml_safe(section.heading))
    run.bold = True
    run.underline = WD_UNDERLINE.SINGLE

    for line in section.body_lines:
        document.add_paragraph(xml_safe(line) or " ")

    _spaced(document.add_paragraph(SEPARATOR_LINE), after=200)


def build_document(
    ref: RepositoryRef,
    branch: str,
    sections: Sequence[DocumentSection],
    *,
    generated_at: str | None = None,
) -> Document:
    """Build the output document for a repository.

    The document starts with a title block, followed by one heading+body block per
    section, in the given order.

    Args:
        ref (RepositoryRef): the repository the sections come from
        branch (str): the branch that was downloaded
        sections (Sequence[DocumentSection]): the included files, in order
        generated_at (str | None): timestamp shown in the title block; defaults to now

    Raises:
        SerializationError: if the document cannot be built

    Returns:
        Document: the in-memory document
    """
    logger.info("Creating DOCX document with %d sections", len(sections))
    try:
        document = docx.Document()
        props = document.core_properties
        props.author = DOCUMENT_CREATOR
        props.title = f"{ref.full_name} Repository"
        props.comments = f"Generated from GitHub repository {ref.full_name}"

        add_title(document, ref, branch, generated_at or now_iso())
        for section in sections:
            add_section(document, section)
    except (ValueError, TypeError) as e:
        raise SerializationError(message=f"Could not build document for {ref.full_name}: {e}") from e
    return document


def save_document(document: Document, path: Path) -> Path:
    """Serialize the document and write it to `path`.

    Args:
        document (Document): the document to write
        path (Path): destination file; missing parent directories are created

    Raises:
        WriteError: if the file cannot be written
        SerializationError: if the document cannot be serialized

    Returns:
        Path: the written path
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        document.save(str(path))
    except OSError as e:
        raise WriteError(path=str(path), message=f"Could not write {path}: {e}") from e
    except Exception as e:
        raise SerializationError(message=f"Could not serialize document to {path}: {e}") from e
    logger.info("Successfully created %s", path)
    return path
