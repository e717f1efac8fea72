from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from repo2docx import cli, converter
from repo2docx.exceptions import RepositoryAccessError, WriteError

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from tests.conftest import ArchiveBuilder


@pytest.mark.unit
def test_convert_repository_propagates_access_error(tmp_path: Path, mocker: MockerFixture) -> None:
    error = RepositoryAccessError(full_name="a/b", message="Repository a/b not found")
    mocker.patch.object(converter, "check_repository_access", side_effect=error)
    download = mocker.patch.object(converter, "download_archive")

    with pytest.raises(RepositoryAccessError) as excinfo:
        converter.convert_repository("a/b", tmp_path / "out.docx")

    assert excinfo.value is error
    assert excinfo.value.__traceback__ is not None
    download.assert_not_called()


@pytest.mark.unit
def test_convert_repository_propagates_write_error(
    tmp_path: Path,
    mocker: MockerFixture,
    make_archive: ArchiveBuilder,
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    mocker.patch.object(converter, "check_repository_access")
    mocker.patch.object(converter, "download_archive", return_value=make_archive({"a.py": "x = 1\n"}))

    with pytest.raises(WriteError) as excinfo:
        converter.convert_repository("a/b", blocker / "out.docx")

    assert excinfo.value.path == str(blocker / "out.docx")


@pytest.mark.unit
def test_main_reports_access_error_from_real_conversion(
    tmp_path: Path,
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    error = RepositoryAccessError(full_name="a/b", message="Repository a/b not found")
    mocker.patch.object(converter, "check_repository_access", side_effect=error)
    output = tmp_path / "out.docx"

    exit_code = cli.main(["a/b", "-o", str(output)])

    assert exit_code == 1
    assert not output.exists()
    assert "Error: Repository a/b not found" in capsys.readouterr().err
