"""Integration tests for the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from mdvi.cli import build_parser, main
from mdvi.config import ImageProtocol

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


def test_parser_defaults(markdown_file: Path) -> None:
    args = build_parser().parse_args([str(markdown_file)])
    assert args.path == markdown_file
    assert args.line == 1
    assert args.image_protocol is None
    assert not args.print_only


@pytest.mark.parametrize("line", ["0", "-3", "abc"])
def test_parser_rejects_bad_line(markdown_file: Path, line: str) -> None:
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args([str(markdown_file), "--line", line])
    assert exc.value.code == 2


def test_parser_rejects_unknown_protocol(markdown_file: Path) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([str(markdown_file), "--image-protocol", "braille"])


def test_missing_file_exits_with_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "nope.md"
    with pytest.raises(SystemExit) as exc:
        main([str(missing)])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "failed to read file" in err
    assert "nope.md" in err


def test_bad_config_exits(
    markdown_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_dir = tmp_path / "config" / "mdvi"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("[viewer]\nimage_protocol = 'braille'\n")
    with pytest.raises(SystemExit) as exc:
        main([str(markdown_file)])
    assert exc.value.code == 1
    assert "image_protocol" in capsys.readouterr().err


def test_print_renders_to_stdout(markdown_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main([str(markdown_file), "--print"])
    out = capsys.readouterr().out
    assert "Release notes" in out
    assert "[image] Screenshot (images/shot.png)" in out
    assert "│ Quoted remark" in out


def test_print_starts_at_line(markdown_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main([str(markdown_file), "--print", "--line", "3"])
    out = capsys.readouterr().out
    assert "Release notes" not in out
    assert "Intro with bold" in out


def test_launches_viewer_with_options(markdown_file: Path) -> None:
    with patch("mdvi.tui.app.ViewerApp") as viewer:
        main([str(markdown_file), "-l", "5", "--image-protocol", "sixel"])
    _, kwargs = viewer.call_args
    assert kwargs["start_line"] == 5
    assert kwargs["image_protocol"] is ImageProtocol.SIXEL
    assert kwargs["path"] == str(markdown_file)
    viewer.return_value.run.assert_called_once_with()


def test_config_protocol_used_when_flag_absent(markdown_file: Path, tmp_path: Path) -> None:
    config_dir = tmp_path / "config" / "mdvi"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("[viewer]\nimage_protocol = 'kitty'\n")
    with patch("mdvi.tui.app.ViewerApp") as viewer:
        main([str(markdown_file)])
    assert viewer.call_args.kwargs["image_protocol"] is ImageProtocol.KITTY


def test_log_file_receives_debug_records(markdown_file: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "mdvi.log"
    with patch("logging.basicConfig") as basic_config:
        main([str(markdown_file), "--print", "--log-file", str(log_file)])
    assert basic_config.call_args.kwargs["filename"] == log_file
