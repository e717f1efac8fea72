from __future__ import annotations

from enum import StrEnum, auto
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

GITHUB_HOST = "github.com"
ARCHIVE_URL_TEMPLATE = "https://{host}/{owner}/{repo}/archive/refs/heads/{branch}.zip"
DEFAULT_BRANCH = "main"
DOCUMENT_EXTENSION = ".docx"
IGNORE_FILE_NAME = ".docxignore"
TOKEN_ENV_VAR = "GITHUB_TOKEN"

NULL_BYTE_RATIO_THRESHOLD = 0.01
SEPARATOR_LINE = "-" * 70

IGNORE_PROGRESS_EVERY = 50
PROCESSED_PROGRESS_EVERY = 25

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    # Version control
    ".git/**",
    ".gitignore",
    ".gitattributes",
    ".gitmodules",
    ".gitkeep",
    ".github/**",
    IGNORE_FILE_NAME,
    # Dependency managers
    "node_modules/**",
    "package-lock.json",
    "yarn.lock",
    "npm-debug.log*",
    "yarn-debug.log*",
    "yarn-error.log*",
    # Editors and IDEs
    ".vscode/**",
    ".idea/**",
    "*.sublime-*",
    ".editorconfig",
    # Build output and tool configuration
    "dist/**",
    "build/**",
    "out/**",
    ".babelrc",
    ".eslintrc*",
    ".prettierrc*",
    "tsconfig.json",
    "jsconfig.json",
    "webpack.config.js",
    "rollup.config.js",
    # Logs and temporary files
    "logs/**",
    "*.log",
    "temp/**",
    "tmp/**",
    # Documentation
    "README.md",
    "CHANGELOG.md",
    "LICENSE",
    "LICENSE.md",
    "AUTHORS",
    "CONTRIBUTORS",
    # OS artifacts
    ".DS_Store",
    "Thumbs.db",
)

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        # images
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".bmp",
        ".ico",
        # documents and executables
        ".pdf",
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        # archives
        ".zip",
        ".tar",
        ".gz",
        ".rar",
        ".7z",
        # audio and video
        ".mp3",
        ".mp4",
        ".avi",
        ".mov",
        ".mpg",
        # fonts
        ".ttf",
        ".woff",
        # compiled objects
        ".class",
        ".pyc",
        ".pyd",
        ".o",
        ".obj",
    },
)


class Verdict(StrEnum):
    """Per-entry decision taken by the archive walker."""

    INCLUDED = auto()
    SKIPPED_BY_IGNORE = auto()
    SKIPPED_AS_BINARY = auto()
    SKIPPED_AS_INVALID_TEXT = auto()
    SKIPPED_BY_ERROR = auto()


class ContentClass(StrEnum):
    """Outcome of the content classifier for a single file."""

    BINARY = auto()
    INVALID_TEXT = auto()
    TEXT = auto()


class RepositoryRef(BaseModel):
    """A GitHub repository, identified by owner and name."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, description="Repository owner (user or organization)")
    repo: str = Field(..., min_length=1, description="Repository name")

    @model_validator(mode="after")
    def check_no_separators(self) -> Self:
        for value in (self.owner, self.repo):
            if "/" in value or "\\" in value:
                msg = f"unexpected path separator in {value!r}"
                raise ValueError(msg)
        return self

    @computed_field
    @property
    def full_name(self) -> str:
        """`owner/repo`, as used by the GitHub API."""
        return f"{self.owner}/{self.repo}"

    @computed_field
    @property
    def default_output_name(self) -> str:
        """Output filename used when the caller does not choose one."""
        return f"{self.owner}-{self.repo}{DOCUMENT_EXTENSION}"

    def archive_url(self, branch: str) -> str:
        return ARCHIVE_URL_TEMPLATE.format(host=GITHUB_HOST, owner=self.owner, repo=self.repo, branch=branch)


class ArchiveEntry(BaseModel):
    """One record of the downloaded zip archive.

    Attributes:
        path: Entry name as stored in the archive (still prefixed by the root directory).
        is_directory: Whether the entry is a directory record.
        raw_bytes: Decompressed content (empty for directories).
    """

    model_config = ConfigDict(frozen=True)

    path: str
    is_directory: bool = False
    raw_bytes: bytes = b""


class DocumentSection(BaseModel):
    """Heading plus body paragraphs emitted for one included file."""

    model_config = ConfigDict(frozen=True)

    heading: str
    body_lines: tuple[str, ...] = ()


class EntryOutcome(BaseModel):
    """Result-or-error value recorded for every non-directory entry."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Path relative to the repository root")
    verdict: Verdict
    section: DocumentSection | None = None
    error: str | None = None


class WalkStats(BaseModel):
    """Disjoint counters accumulated over one archive walk."""

    model_config = ConfigDict(frozen=True)

    processed: int = 0
    skipped_by_ignore: int = 0
    skipped_as_binary: int = 0
    skipped_as_invalid_text: int = 0
    skipped_by_error: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return (
            self.processed
            + self.skipped_by_ignore
            + self.skipped_as_binary
            + self.skipped_as_invalid_text
            + self.skipped_by_error
        )

    def count(self, verdict: Verdict) -> Self:
        """Return a copy with the counter matching `verdict` incremented."""
        field = _VERDICT_COUNTER[verdict]
        return self.model_copy(update={field: getattr(self, field) + 1})


_VERDICT_COUNTER: dict[Verdict, str] = {
    Verdict.INCLUDED: "processed",
    Verdict.SKIPPED_BY_IGNORE: "skipped_by_ignore",
    Verdict.SKIPPED_AS_BINARY: "skipped_as_binary",
    Verdict.SKIPPED_AS_INVALID_TEXT: "skipped_as_invalid_text",
    Verdict.SKIPPED_BY_ERROR: "skipped_by_error",
}


class WalkResult(BaseModel):
    """Ordered outcomes of an archive walk plus the accumulated counters."""

    model_config = ConfigDict(frozen=True)

    outcomes: tuple[EntryOutcome, ...] = ()
    stats: WalkStats = Field(default_factory=WalkStats)

    @property
    def sections(self) -> list[DocumentSection]:
        """Sections of the included entries, in archive order."""
        return [o.section for o in self.outcomes if o.verdict is Verdict.INCLUDED and o.section is not None]
