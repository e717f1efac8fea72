from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import docx
import pytest

from repo2docx import convert_repository, converter
from repo2docx.config import SEPARATOR_LINE, RepositoryRef
from repo2docx.exceptions import InvalidIdentifierError

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from tests.conftest import ArchiveBuilder


def _paragraphs(path: Path) -> list[str]:
    return [p.text for p in docx.Document(str(path)).paragraphs]


def test_end_to_end_default_patterns(
    tmp_path: Path,
    mocker: MockerFixture,
    make_archive: ArchiveBuilder,
    sample_files: dict[str, bytes | str],
) -> None:
    mocker.patch.object(converter, "check_repository_access")
    mocker.patch.object(converter, "download_archive", return_value=make_archive(sample_files))
    output = tmp_path / "demo.docx"

    written = convert_repository("someone/demo", output)

    assert written == output
    texts = _paragraphs(output)
    assert texts[0] == "Repository: someone/demo"
    assert texts[1] == "Branch: main"
    assert texts[2].startswith("Generated on: ")
    assert texts[3] == "src/index.js"
    assert texts[4:54] == [f"console.log({i});" for i in range(50)]
    assert texts[54] == SEPARATOR_LINE
    assert len(texts) == 55


def test_end_to_end_walk_counts(
    tmp_path: Path,
    make_archive: ArchiveBuilder,
    sample_files: dict[str, bytes | str],
) -> None:
    ref = RepositoryRef(owner="someone", repo="demo")

    result = converter.convert_archive(ref, "main", make_archive(sample_files), tmp_path / "demo.docx")

    assert result.stats.processed == 1
    assert result.stats.skipped_by_ignore == 2
    assert result.stats.skipped_as_binary == 1
    assert result.stats.skipped_as_invalid_text == 0
    assert result.stats.skipped_by_error == 0


def test_end_to_end_repository_ignore_file_excludes_everything(
    tmp_path: Path,
    make_archive: ArchiveBuilder,
    sample_files: dict[str, bytes | str],
) -> None:
    ref = RepositoryRef(owner="someone", repo="demo")
    archive = make_archive({**sample_files, ".docxignore": "# nothing from src\nsrc/**\n"})

    result = converter.convert_archive(ref, "main", archive, tmp_path / "demo.docx")

    assert result.sections == []
    assert _paragraphs(tmp_path / "demo.docx")[0] == "Repository: someone/demo"
    assert len(_paragraphs(tmp_path / "demo.docx")) == 3


def test_end_to_end_default_output_name(
    tmp_path: Path,
    mocker: MockerFixture,
    make_archive: ArchiveBuilder,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.chdir(tmp_path)
    mocker.patch.object(converter, "check_repository_access")
    mocker.patch.object(converter, "download_archive", return_value=make_archive({"a.txt": "a"}))

    written = convert_repository("https://www.github.com/someone/demo")

    assert written == Path("someone-demo.docx")
    assert (tmp_path / "someone-demo.docx").exists()


def test_end_to_end_invalid_identifier_never_fetches(mocker: MockerFixture) -> None:
    access = mocker.patch.object(converter, "check_repository_access")
    download = mocker.patch.object(converter, "download_archive")

    with pytest.raises(InvalidIdentifierError):
        convert_repository("nope")

    access.assert_not_called()
    download.assert_not_called()
