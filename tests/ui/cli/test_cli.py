"""Tests for CLI functionality."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from vaultify.ui.cli.args import ArgumentParser
from vaultify.ui.cli.args.options import InspectArgs, ParseNameArgs, ServeArgs
from vaultify.ui.cli.cli import CommandProcessor, main


@pytest.fixture
def mock_display(mocker: MockerFixture) -> MagicMock:
    """Replace the Rich renderer so tests can inspect what was shown."""

    return mocker.patch("vaultify.ui.cli.cli.MetadataDisplay").return_value


def test_parse_serve_args() -> None:
    args = ArgumentParser.process_args(["serve", "--host", "0.0.0.0", "--port", "9000", "--reload"])

    assert args == ServeArgs(command="serve", host="0.0.0.0", port=9000, config_path=None, reload=True)


def test_parse_inspect_args(tmp_path: Path) -> None:
    song = tmp_path / "song.mp3"
    song.touch()

    args = ArgumentParser.process_args(["inspect", str(song), "--no-catalog", "--config", "c.toml"])

    assert isinstance(args, InspectArgs)
    assert args.file_path == song
    assert args.use_catalog is False
    assert args.config_path == Path("c.toml")


def test_inspect_requires_existing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["inspect", str(tmp_path / "missing.mp3")])
    assert excinfo.value.code == 1


def test_parse_name_args() -> None:
    assert ArgumentParser.process_args(["parse-name", "a - b.mp3"]) == ParseNameArgs(
        command="parse-name", name="a - b.mp3"
    )


def test_verbosity_flags_set_console_level(mocker: MockerFixture) -> None:
    setup = mocker.patch("vaultify.ui.cli.args.parser.setup_logger")

    _ = ArgumentParser.process_args(["parse-name", "x", "--quiet"])
    setup.assert_called_with(console_level=logging.ERROR)

    _ = ArgumentParser.process_args(["parse-name", "x", "--verbose"])
    setup.assert_called_with(console_level=logging.DEBUG)


def test_parse_name_shows_candidate(mock_display: MagicMock) -> None:
    CommandProcessor.process_command(["parse-name", "A.R.Rahman - Kannalanae (96).mp3"])

    heading, candidate = mock_display.show_candidate.call_args.args
    assert heading == "A.R.Rahman - Kannalanae (96).mp3"
    assert (candidate.title, candidate.artist, candidate.album) == ("Kannalanae", "A.R.Rahman", "96")


def test_inspect_without_catalog(
    mock_display: MagicMock,
    mocker: MockerFixture,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("VAULTIFY_CONFIG", str(tmp_path / "absent.toml"))
    build_matcher = mocker.patch("vaultify.api.dependencies.build_matcher")
    song = tmp_path / "Anirudh - Kutti Story.mp3"
    _ = song.write_bytes(b"not audio")

    CommandProcessor.process_command(
        ["inspect", str(song), "--no-catalog", "--existing-json", json.dumps({"album": "Master"})]
    )

    build_matcher.assert_not_called()
    record = mock_display.show_record.call_args.args[1]
    assert (record.title, record.artist) == ("Kutti Story", "Anirudh")
    matches = mock_display.show_matches.call_args.args[0]
    assert [match.title for match in matches] == ["Kutti Story"]


def test_inspect_rejects_bad_existing_json(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAULTIFY_CONFIG", str(tmp_path / "absent.toml"))
    song = tmp_path / "song.mp3"
    song.touch()

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["inspect", str(song), "--no-catalog", "--existing-json", "[1, 2]"])
    assert excinfo.value.code == 1


def test_serve_runs_uvicorn(mocker: MockerFixture, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VAULTIFY_CONFIG", str(tmp_path / "absent.toml"))
    monkeypatch.setenv("VAULTIFY_SCRATCH_DIR", str(tmp_path))
    run = mocker.patch("vaultify.ui.cli.cli.uvicorn.run")
    create_app = mocker.patch("vaultify.api.create_app")

    CommandProcessor.process_command(["serve", "--port", "8123"])

    create_app.assert_called_once()
    assert run.call_args.args == (create_app.return_value,)
    assert run.call_args.kwargs["port"] == 8123


def test_keyboard_interrupt_exits_130(mocker: MockerFixture) -> None:
    _ = mocker.patch("vaultify.ui.cli.cli.FilenameParser", side_effect=KeyboardInterrupt)

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["parse-name", "x.mp3"])
    assert excinfo.value.code == 130


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch.object(CommandProcessor, "process_command")

    assert main() == 0
    process.assert_called_once_with()
