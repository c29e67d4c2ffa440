"""Unit tests for the Markdown post-processing pass."""

from __future__ import annotations

import pytest

from confluence_md.converter.postprocess import (
    add_eol_after_quote_blocks,
    collapse_empty_lines,
    post_process,
    replace_panel_markers,
    unwrap_table_blocks,
)


def test_info_marker_becomes_tag() -> None:
    """The info blockquote marker renders as the target wiki's callout tag."""
    rendered = "> ==!info==\n> notice text\n"
    assert post_process(rendered) == "> [!info]\n> notice text\n"


@pytest.mark.parametrize("kind", ["note", "warning", "info"])
def test_every_panel_marker_is_replaced(kind: str) -> None:
    assert replace_panel_markers(f"> ==!{kind}==") == f"> [!{kind}]"


def test_blank_line_runs_collapse() -> None:
    assert collapse_empty_lines("a\n\n\n\nb\n\nc\n") == "a\n\nb\n\nc\n"


def test_quote_is_followed_by_an_empty_line() -> None:
    text = "> [!note]\n> hint\nAfter\n"
    assert add_eol_after_quote_blocks(text) == "> [!note]\n> hint\n\nAfter\n"


@pytest.mark.parametrize("fence", ["``` table", "```table", "``` {.table}"])
def test_table_blocks_are_unwrapped(fence: str) -> None:
    text = f"Intro\n\n{fence}\n| A | B |\n| ---- | ---- |\n| 1 | 2 |\n```\n\nOutro\n"
    assert unwrap_table_blocks(text) == (
        "Intro\n\n| A | B |\n| ---- | ---- |\n| 1 | 2 |\n\nOutro\n"
    )


def test_other_code_blocks_are_kept() -> None:
    text = "``` python\nprint('x')\n```\n"
    assert unwrap_table_blocks(text) == text
