"""Unit tests for the pandoc renderer wrapper.

``run_pandoc`` and ``shutil.which`` are monkeypatched so the tests never
spawn a real process.
"""

from __future__ import annotations

import logging
import subprocess
import typing as typ
from pathlib import Path

import pytest

from confluence_md.config import PandocConfig
from confluence_md.converter import renderer


@pytest.fixture
def fake_which(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(renderer.shutil, "which", lambda name: f"/usr/bin/{name}")


def test_missing_executable_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(renderer.shutil, "which", lambda name: None)
    with pytest.raises(renderer.RendererNotFoundError, match="pandoc"):
        renderer.PandocRenderer(PandocConfig())


@pytest.mark.usefixtures("fake_which")
def test_command_uses_configured_formats(tmp_path: Path) -> None:
    pandoc = renderer.PandocRenderer(
        PandocConfig(output_format="gfm", extra_args=["--wrap=none", "-s"])
    )
    target = tmp_path / "out.md"
    assert pandoc.command(target) == [
        "/usr/bin/pandoc",
        "-f",
        "html",
        "-t",
        "gfm",
        "--wrap=none",
        "-s",
        "-o",
        str(target),
    ]


@pytest.mark.usefixtures("fake_which")
def test_render_feeds_html_on_stdin_and_waits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[dict[str, typ.Any]] = []

    def _fake_run(
        args: list[str], *, input_text: str, cwd: Path
    ) -> subprocess.CompletedProcess[str]:
        calls.append({"args": args, "input": input_text, "cwd": cwd})
        (cwd / "page.md").write_text("# Page\n", encoding="utf-8")
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(renderer, "run_pandoc", _fake_run)
    target = tmp_path / "space" / "chapter" / "page.md"
    result = renderer.PandocRenderer(PandocConfig()).render("<h1>Page</h1>", target)
    assert result.ok
    assert result.target == target
    assert target.read_text(encoding="utf-8") == "# Page\n"
    assert calls[0]["input"] == "<h1>Page</h1>"
    assert calls[0]["cwd"] == target.parent.resolve()


@pytest.mark.usefixtures("fake_which")
def test_relative_target_is_made_absolute(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The output path handed to pandoc does not depend on pandoc's cwd."""
    calls: list[list[str]] = []

    def _fake_run(
        args: list[str], *, input_text: str, cwd: Path
    ) -> subprocess.CompletedProcess[str]:
        calls.append(args)
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(renderer, "run_pandoc", _fake_run)
    monkeypatch.chdir(tmp_path)
    target = Path("wiki") / "DEV" / "page.md"
    result = renderer.PandocRenderer(PandocConfig()).render("<p>x</p>", target)
    assert result.target == target
    assert calls[0][-1] == str((tmp_path / target).resolve())
    assert (tmp_path / "wiki" / "DEV").is_dir()


@pytest.mark.usefixtures("fake_which")
def test_render_failure_is_reported_not_raised(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setattr(
        renderer,
        "run_pandoc",
        lambda args, **kwargs: subprocess.CompletedProcess(
            args, 64, "", "unknown reader\n"
        ),
    )
    target = tmp_path / "page.md"
    with caplog.at_level(logging.ERROR, logger="confluence_md"):
        result = renderer.PandocRenderer(PandocConfig()).render("<p/>", target)
    assert not result.ok
    assert result.returncode == 64
    assert result.stderr == "unknown reader"
    assert "pandoc failed" in caplog.text
