"""Behaviour tests for converting a small Confluence export end to end.

These pytest-bdd scenarios drive :class:`~confluence_md.converter.SpaceConverter`
through the real :class:`~confluence_md.converter.PandocRenderer` with
``run_pandoc`` stubbed. The stub mimics the parts of pandoc's Markdown output
the post-processor relies on: blockquotes become ``>`` lines and
``<pre class="table">`` blocks become fenced ``table`` code blocks.

Usage
-----
Run ``pytest tests/bdd/test_convert_export.py -v``. pandoc does not need to
be installed.
"""

from __future__ import annotations

import subprocess
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from confluence_md.config import ConverterConfig
from confluence_md.converter import SpaceConverter, renderer

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "convert_export.feature"
)
scenarios(FEATURE_FILE)

TOC = (
    "<div><ul>"
    '<li><a href="Guide_10.html">User Guide</a><ul>'
    '<li><a href="Limits_11.html">Limits</a></li>'
    "</ul></li>"
    "</ul></div>"
)


def _fake_pandoc(
    args: list[str], *, input_text: str, cwd: Path
) -> subprocess.CompletedProcess[str]:
    """Write a Markdown-like rendering of ``input_text`` to the ``-o`` target.

    The output path is resolved against ``cwd`` the way pandoc resolves it.
    """
    soup = BeautifulSoup(input_text, "html.parser")
    for block in soup.select("pre.table"):
        block.replace_with(f"\n``` table\n{block.get_text()}```\n")
    for quote in soup.select("blockquote"):
        lines = quote.get_text("\n").splitlines()
        quote.replace_with("\n" + "".join(f"> {line}\n" for line in lines))
    for anchor in soup.select("a[href]"):
        anchor.replace_with(f"[{anchor.get_text()}]({anchor['href']})")
    (cwd / args[-1]).write_text(soup.get_text(), encoding="utf-8")
    return subprocess.CompletedProcess(args, 0, "", "")


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("an exported space with a nested table of contents")
def given_export(
    tmp_path: Path,
    write_page: typ.Callable[..., Path],
    scenario_state: dict[str, object],
) -> None:
    """Write an index, a chapter page, and a leaf page for the DOCS space."""
    space = tmp_path / "export" / "DOCS"
    write_page(space / "index.html", title="Docs", body=TOC)
    write_page(
        space / "Guide_10.html",
        title="Docs : User Guide",
        breadcrumb="Docs",
        body='<p>Read the <a href="Limits_11.html">limits</a> first.</p>',
    )
    write_page(
        space / "Limits_11.html",
        title="Docs : Limits",
        breadcrumb="Docs",
        body=(
            '<div class="confluence-information-macro '
            'confluence-information-macro-information">'
            '<div class="confluence-information-macro-body">'
            "<p>notice text</p></div></div>"
            '<div class="table-wrap"><table class="confluenceTable"><tbody>'
            "<tr><th>Resource</th><th>Limit</th></tr>"
            "<tr><td>Pages</td><td>100</td></tr>"
            "</tbody></table></div>"
        ),
    )
    scenario_state["source"] = tmp_path / "export"
    scenario_state["destination"] = tmp_path / "wiki"


@given("pandoc is stubbed")
def given_pandoc_stub(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace the pandoc process with an in-process stand-in."""
    monkeypatch.setattr(renderer.shutil, "which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr(renderer, "run_pandoc", _fake_pandoc)


@when("I convert the export")
def when_convert(scenario_state: dict[str, object]) -> None:
    """Run the converter with the default configuration."""
    source = typ.cast("Path", scenario_state["source"])
    destination = typ.cast("Path", scenario_state["destination"])
    scenario_state["written"] = SpaceConverter(ConverterConfig()).run(
        source, destination
    )


def _read(scenario_state: dict[str, object], *parts: str) -> str:
    destination = typ.cast("Path", scenario_state["destination"])
    return destination.joinpath(*parts).read_text(encoding="utf-8")


@then("the chapter page is written inside its own directory")
def then_chapter_directory(scenario_state: dict[str, object]) -> None:
    destination = typ.cast("Path", scenario_state["destination"])
    written = typ.cast("list[Path]", scenario_state["written"])
    assert destination / "DOCS" / "User Guide" / "User Guide.md" in written


@then("the leaf page is written next to its chapter page")
def then_leaf_next_to_chapter(scenario_state: dict[str, object]) -> None:
    destination = typ.cast("Path", scenario_state["destination"])
    assert (destination / "DOCS" / "User Guide" / "Limits.md").is_file()


@then("links between pages point at the generated names")
def then_links_rewritten(scenario_state: dict[str, object]) -> None:
    markdown = _read(scenario_state, "DOCS", "User Guide", "User Guide.md")
    assert "[limits](Limits)" in markdown, (
        f"expected a link to the generated leaf page, got {markdown!r}"
    )


@then("the leaf page starts its panel with an info tag")
def then_info_tag(scenario_state: dict[str, object]) -> None:
    markdown = _read(scenario_state, "DOCS", "User Guide", "Limits.md")
    lines = markdown.splitlines()
    assert "> [!info]" in lines
    assert lines[lines.index("> [!info]") + 1] == "> notice text"
    assert "==!info==" not in markdown


@then("the leaf page contains a pipe table")
def then_pipe_table(scenario_state: dict[str, object]) -> None:
    markdown = _read(scenario_state, "DOCS", "User Guide", "Limits.md")
    lines = markdown.splitlines()
    start = lines.index("| Resource | Limit |")
    assert lines[start + 1 : start + 3] == ["| ---- | ---- |", "| Pages | 100 |"]
    assert "```" not in markdown
