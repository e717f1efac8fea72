from __future__ import annotations

import re

from pydantic import ValidationError

from repo2docx.config import GITHUB_HOST, RepositoryRef
from repo2docx.exceptions import InvalidIdentifierError

_URL_PREFIX = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/", re.IGNORECASE)


def _make_ref(identifier: str, owner: str, repo: str) -> RepositoryRef:
    try:
        return RepositoryRef(owner=owner, repo=repo)
    except ValidationError as e:
        raise InvalidIdentifierError(identifier=identifier) from e


def parse_repo_identifier(identifier: str) -> RepositoryRef:
    """Parse a GitHub URL or an `owner/repo` shorthand.

    Accepted shapes:
    - `https://github.com/owner/repo`, with or without `www.`, a `.git` suffix or
      trailing path segments (only the first two segments are kept);
    - `owner/repo`, exactly one slash with two non-empty halves.

    Args:
        identifier (str): the user-supplied repository identifier

    Raises:
        InvalidIdentifierError: if the identifier has any other shape

    Returns:
        RepositoryRef: the parsed owner/repo pair
    """
    text = (identifier or "").strip()

    if GITHUB_HOST in text.lower():
        match = _URL_PREFIX.match(text)
        if match is None:
            raise InvalidIdentifierError(identifier=identifier)
        rest = text[match.end() :].rstrip("/")
        rest = rest.removesuffix(".git")
        segments = [s for s in rest.split("/") if s]
        if len(segments) < 2:  # noqa: PLR2004
            raise InvalidIdentifierError(identifier=identifier)
        return _make_ref(identifier, segments[0], segments[1].removesuffix(".git"))

    if text.count("/") == 1:
        owner, repo = text.split("/")
        if owner and repo:
            return _make_ref(identifier, owner, repo)

    raise InvalidIdentifierError(identifier=identifier)
