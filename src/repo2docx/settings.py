from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from repo2docx.config import DEFAULT_BRANCH, TOKEN_ENV_VAR
from repo2docx.github_client import DEFAULT_TIMEOUT

ENV_FILE = find_dotenv(usecwd=True)


def load_env() -> None:
    """Load a `.env` file found from the working directory, without overriding the environment."""
    if ENV_FILE:
        load_dotenv(ENV_FILE, override=False)


def token_from_env() -> str:
    return os.environ.get(TOKEN_ENV_VAR, "")


class Settings(BaseModel):
    """Configuration settings for one repo2docx run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    repository: str = Field(..., description="GitHub URL or owner/repo.")
    output: Path | None = Field(default=None, description="Output file (default: <owner>-<repo>.docx).")
    branch: str = Field(default=DEFAULT_BRANCH, min_length=1, description="Repository branch.")
    token: str = Field(default_factory=token_from_env, description="GitHub personal access token.")
    ignore_file: Path | None = Field(default=None, description="Path to a local .docxignore file.")
    log_file: str = Field(default="", description="Log file path.")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds.")
