"""Unit tests for the ``confluence-md`` command functions."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from confluence_md import cli

if typ.TYPE_CHECKING:
    from confluence_md.config import ConverterConfig


class _FakeConverter:
    seen: typ.ClassVar[list[tuple[ConverterConfig, Path, Path]]] = []

    def __init__(self, config: ConverterConfig) -> None:
        self.config = config

    def run(self, source: Path, destination: Path) -> list[Path]:
        self.seen.append((self.config, source, destination))
        return [destination / "DEV" / "index.md"]


def test_convert_prints_written_paths(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(cli, "SpaceConverter", _FakeConverter)
    monkeypatch.setattr(_FakeConverter, "seen", [])
    monkeypatch.chdir(tmp_path)
    cli.convert(
        tmp_path / "export", tmp_path / "wiki", verbosity="warning", pandoc="pandoc3"
    )
    config, source, destination = _FakeConverter.seen[0]
    assert config.verbosity == "warning"
    assert config.pandoc.executable == "pandoc3"
    assert source == tmp_path / "export"
    assert destination == tmp_path / "wiki"
    assert capsys.readouterr().out == f"wrote {Path('wiki') / 'DEV' / 'index.md'}\n"


def test_toc_prints_each_mapping(
    tmp_path: Path,
    write_page: typ.Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    write_page(
        tmp_path / "DEV" / "index.html",
        title="Dev",
        body='<div><ul><li><a href="Home_1.html">Home</a></li></ul></div>',
    )
    cli.toc(tmp_path)
    assert capsys.readouterr().out.splitlines() == [
        "DEV: Home_1.html -> .",
        "DEV: index.html -> .",
    ]


def test_app_is_named_after_the_console_script() -> None:
    assert cli.app.name[0] == "confluence-md"
