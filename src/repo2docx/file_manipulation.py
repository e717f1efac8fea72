from __future__ import annotations

import re
from pathlib import PurePosixPath

from repo2docx.config import BINARY_EXTENSIONS, NULL_BYTE_RATIO_THRESHOLD, ContentClass
from repo2docx.exceptions import FileProcessingError

_LINE_BREAK = re.compile(r"\r?\n")


def is_binary_path(path: str) -> bool:
    """Check if a path has a well-known binary extension.

    The check is case-insensitive and never looks at the content, so a `.png`
    made of ASCII bytes is still binary.

    Args:
        path (str): the file path to check

    Returns:
        bool: True if the extension is in the binary list
    """
    return PurePosixPath(path.replace("\\", "/")).suffix.lower() in BINARY_EXTENSIONS


def null_byte_ratio(text: str) -> float:
    """Return the share of NUL characters in `text`.

    Args:
        text (str): the decoded content

    Returns:
        float: the ratio in [0, 1], or NaN for empty text
    """
    if not text:
        return float("nan")
    return text.count("\x00") / len(text)


def is_valid_text(text: str) -> bool:
    """Heuristic text check: fewer than 1% NUL characters.

    Empty content has no defined ratio and does not pass.

    Args:
        text (str): the decoded content

    Returns:
        bool: True if the content is considered displayable text
    """
    return null_byte_ratio(text) < NULL_BYTE_RATIO_THRESHOLD


def classify_content(path: str, text: str | None = None) -> ContentClass:
    """Classify a file as binary, invalid text or text.

    The extension check runs first and short-circuits; `text` is only looked at
    when the extension is not a binary one.

    Args:
        path (str): the file path
        text (str | None): the decoded content, or None when not decoded yet

    Returns:
        ContentClass: the classification
    """
    if is_binary_path(path):
        return ContentClass.BINARY
    if text is None or not is_valid_text(text):
        return ContentClass.INVALID_TEXT
    return ContentClass.TEXT


def decode_text(path: str, data: bytes) -> str:
    """Decode file bytes as strict UTF-8.

    Args:
        path (str): the file path, used for error reporting
        data (bytes): the raw content

    Raises:
        FileProcessingError: if the bytes are not valid UTF-8

    Returns:
        str: the decoded text
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileProcessingError(path=path, message=f"Could not decode {path} as UTF-8: {e}") from e


def split_body_lines(text: str) -> list[str]:
    """Split content into body paragraphs.

    Lines are split on `\\n` or `\\r\\n`; an empty line becomes a single space so
    that it survives as a blank paragraph.

    Args:
        text (str): the decoded content

    Returns:
        list[str]: one entry per line
    """
    return [line or " " for line in _LINE_BREAK.split(text)]
