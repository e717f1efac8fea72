from __future__ import annotations

import io
import zipfile
from collections.abc import Callable, Mapping

import pytest

ArchiveBuilder = Callable[..., bytes]


def build_zip(files: Mapping[str, bytes | str], *, root: str = "demo-main") -> bytes:
    """Build an in-memory zip shaped like a GitHub branch archive."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(f"{root}/", b"")
        dirs: set[str] = set()
        for name in files:
            parts = name.split("/")[:-1]
            for i in range(1, len(parts) + 1):
                dirs.add("/".join(parts[:i]))
        for d in sorted(dirs):
            zf.writestr(f"{root}/{d}/", b"")
        for name, content in files.items():
            data = content.encode("utf-8") if isinstance(content, str) else content
            zf.writestr(f"{root}/{name}", data)
    return buf.getvalue()


@pytest.fixture
def make_archive() -> ArchiveBuilder:
    return build_zip


@pytest.fixture
def sample_files() -> dict[str, bytes | str]:
    index_js = "\n".join(f"console.log({i});" for i in range(50))
    return {
        "README.md": "# demo\n",
        "src/index.js": index_js,
        "node_modules/x/index.js": "module.exports = 1;\n",
        "logo.png": b"just ascii pretending to be an image",
    }
