from dataclasses import dataclass


@dataclass
class Repo2DocxError(Exception):
    """Base exception for errors in the repo2docx package."""

    def __str__(self) -> str:
        return getattr(self, "message", self.__class__.__name__)


@dataclass
class InvalidIdentifierError(Repo2DocxError):
    """Raised when a repository identifier is neither a GitHub URL nor `owner/repo`."""

    identifier: str
    message: str = (
        "Invalid repository identifier. Please use a GitHub URL "
        "(https://github.com/owner/repo) or owner/repo format."
    )


@dataclass
class RepositoryAccessError(Repo2DocxError):
    """Raised when the repository or branch cannot be reached with the given credential."""

    full_name: str
    message: str


@dataclass
class FetchError(Repo2DocxError):
    """Raised when the repository archive cannot be downloaded or opened."""

    url: str
    message: str


@dataclass
class FileProcessingError(Repo2DocxError):
    """Raised when a single archive entry cannot be turned into text."""

    path: str
    message: str


@dataclass
class SerializationError(Repo2DocxError):
    """Raised when the output document cannot be built or serialized."""

    message: str


@dataclass
class WriteError(Repo2DocxError):
    """Raised when the output document cannot be persisted."""

    path: str
    message: str
