"""Shared fixtures for building small Confluence-style HTML exports on disk."""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path


def _page_markup(title: str, body: str, breadcrumb: str | None) -> str:
    crumbs = (
        f'<div id="breadcrumbs"><ol><li class="first"><span>'
        f"<a>{breadcrumb}</a></span></li></ol></div>"
        if breadcrumb
        else ""
    )
    return (
        "<html><head>"
        f"<title>{title}</title>"
        "</head><body>"
        f'<div id="page"><div id="main-header">{crumbs}'
        f'<h1 id="title-heading" class="pagetitle">{title}</h1></div>'
        f'<div id="content" class="view"><div id="main-content" class="wiki-content">'
        f"{body}"
        "</div></div></div>"
        "</body></html>"
    )


@pytest.fixture
def write_page() -> typ.Callable[..., Path]:
    """Return a helper that writes an exported page below a space directory."""

    def _write(
        path: Path,
        *,
        title: str,
        body: str = "",
        breadcrumb: str | None = None,
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_page_markup(title, body, breadcrumb), encoding="utf-8")
        return path

    return _write
