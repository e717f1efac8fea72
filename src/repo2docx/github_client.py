"""GitHub access: repository metadata check (PyGithub) and archive download (requests)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import requests
from github import Auth, BadCredentialsException, Github, GithubException, UnknownObjectException

from repo2docx.exceptions import FetchError, RepositoryAccessError
from repo2docx.logging import logger

if TYPE_CHECKING:
    from repo2docx.config import RepositoryRef

DEFAULT_TIMEOUT = 60.0


def make_client(token: str | None = None) -> Github:
    """Build a GitHub API client, authenticated when a token is given.

    Args:
        token (str | None): personal access token, or None for anonymous (rate-limited) access

    Returns:
        Github: the API client
    """
    return Github(auth=Auth.Token(token)) if token else Github()


def check_repository_access(ref: RepositoryRef, branch: str, token: str | None = None) -> None:
    """Confirm that the repository and the branch exist and are readable.

    Args:
        ref (RepositoryRef): the repository to check
        branch (str): the branch to be downloaded
        token (str | None): optional personal access token

    Raises:
        RepositoryAccessError: if the repository or branch is missing, private
            without a valid token, or the API call fails
    """
    client = make_client(token)
    try:
        repository = client.get_repo(ref.full_name)
        logger.info("Repository %s found (default branch: %s)", repository.full_name, repository.default_branch)
        repository.get_branch(branch)
    except BadCredentialsException as e:
        raise RepositoryAccessError(
            full_name=ref.full_name,
            message=f"Bad credentials while accessing {ref.full_name}; check your token",
        ) from e
    except UnknownObjectException as e:
        raise RepositoryAccessError(
            full_name=ref.full_name,
            message=(
                f"Repository {ref.full_name} or branch {branch!r} not found "
                "(private repositories need a token with read access)"
            ),
        ) from e
    except GithubException as e:
        raise RepositoryAccessError(
            full_name=ref.full_name,
            message=f"Failed to access repository {ref.full_name}: HTTP {e.status}",
        ) from e
    except requests.RequestException as e:
        raise RepositoryAccessError(
            full_name=ref.full_name,
            message=f"Failed to reach the GitHub API for {ref.full_name}: {e}",
        ) from e
    finally:
        client.close()


def download_archive(
    ref: RepositoryRef,
    branch: str,
    token: str | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> bytes:
    """Download the zip archive of a branch.

    Args:
        ref (RepositoryRef): the repository to download
        branch (str): the branch to download
        token (str | None): optional personal access token, sent as a bearer credential
        timeout (float): request timeout in seconds

    Raises:
        FetchError: on network failure or non-success HTTP status

    Returns:
        bytes: the raw zip archive
    """
    url = ref.archive_url(branch)
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    logger.info("Downloading %s (%s branch)...", ref.full_name, branch)
    try:
        resp = requests.get(url, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as e:
        raise FetchError(url=url, message=f"HTTP {e.response.status_code}: failed to download {url}") from e
    except requests.RequestException as e:
        raise FetchError(url=url, message=f"Failed to download {url}: {e}") from e
    logger.info("Downloaded %d bytes from %s", len(resp.content), url)
    return resp.content
