from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from contextlib import AbstractContextManager
    from pathlib import Path

_LOGGER_NAME = "repo2docx"
_configured = False


def _file_handler(filename: str | Path) -> logging.Handler:
    return logging.FileHandler(os.path.abspath(filename), encoding="utf-8")


def setup_logging(filename: str | Path | None = None, *, level: int = logging.INFO) -> structlog.BoundLogger:
    """Set up structured JSON logging for the repo2docx package.

    Records go to stderr unless `filename` is given. Calling again with a
    `filename` after the first setup adds that file as an extra destination.

    Args:
        filename: Optional path to a log file.
        level: Minimum level that is emitted.

    Returns:
        A structlog logger bound to the repo2docx package.
    """
    global _configured  # noqa: PLW0603
    if not _configured:
        handler = _file_handler(filename) if filename else logging.StreamHandler(sys.stderr)
        logging.basicConfig(level=level, handlers=[handler], format="%(message)s")
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _configured = True
    elif filename:
        root = logging.getLogger()
        target = os.path.abspath(filename)
        if all(getattr(h, "baseFilename", None) != target for h in root.handlers):
            root.addHandler(_file_handler(target))

    return structlog.get_logger(_LOGGER_NAME)


def run_context(**values: str) -> AbstractContextManager[None]:
    """Attach `values` (e.g. repository, branch) to every record logged inside the block."""
    return structlog.contextvars.bound_contextvars(**values)


logger = setup_logging()
