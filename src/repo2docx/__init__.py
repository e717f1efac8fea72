"""Download a GitHub repository and flatten its source tree into a single DOCX document."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("repo2docx")
except PackageNotFoundError:
    __version__ = "0.0.0"

from repo2docx.converter import convert_repository
from repo2docx.identifier import parse_repo_identifier

__all__ = ["__version__", "convert_repository", "parse_repo_identifier"]
