from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from repo2docx import __version__, cli
from repo2docx.exceptions import RepositoryAccessError

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.mark.unit
def test_parse_args_reads_all_options(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    settings = cli.parse_args(
        [
            "octocat/hello-world",
            "-o",
            "docs.docx",
            "-b",
            "dev",
            "-t",
            "secret",
            "-i",
            "local.ignore",
            "--timeout",
            "12.5",
        ],
    )

    assert settings.repository == "octocat/hello-world"
    assert settings.output == Path("docs.docx")
    assert settings.branch == "dev"
    assert settings.token == "secret"
    assert settings.ignore_file == Path("local.ignore")
    assert settings.timeout == pytest.approx(12.5)


@pytest.mark.unit
def test_parse_args_token_defaults_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "from-env")

    assert cli.parse_args(["a/b"]).token == "from-env"


@pytest.mark.unit
def test_parse_args_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--version"])

    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


@pytest.mark.unit
def test_parse_args_without_repository_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args([])

    assert exc_info.value.code == 0
    assert "usage: repo2docx" in capsys.readouterr().out


@pytest.mark.unit
def test_main_passes_local_ignore_patterns(tmp_path: Path, mocker: MockerFixture) -> None:
    ignore_file = tmp_path / "local.ignore"
    ignore_file.write_text("# mine\n*.snap\n", encoding="utf-8")
    convert = mocker.patch.object(cli, "convert_repository", return_value=tmp_path / "out.docx")

    exit_code = cli.main(["octocat/hello-world", "-i", str(ignore_file), "-t", "tok"])

    assert exit_code == 0
    convert.assert_called_once()
    assert convert.call_args.kwargs["ignore_paths"] == ["*.snap"]
    assert convert.call_args.kwargs["token"] == "tok"
    assert convert.call_args.kwargs["branch"] == "main"


@pytest.mark.unit
def test_main_reports_errors_with_non_zero_exit(
    mocker: MockerFixture,
    capsys: pytest.CaptureFixture[str],
) -> None:
    mocker.patch.object(
        cli,
        "convert_repository",
        side_effect=RepositoryAccessError(full_name="a/b", message="Repository a/b not found"),
    )

    exit_code = cli.main(["a/b"])

    assert exit_code == 1
    assert "Error: Repository a/b not found" in capsys.readouterr().err


@pytest.mark.unit
def test_main_invalid_identifier_exits_non_zero(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["not-a-repo"]) == 1
    assert "Invalid repository identifier" in capsys.readouterr().err
