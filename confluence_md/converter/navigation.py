"""Derive the output directory of every page from a space's table of contents.

Confluence exports the page tree of a space as nested ``<ul>`` lists on the
space's ``index.html``. A list item that is only a link is a leaf page and
lives in its parent chapter's directory; a list item whose link is followed by
a nested list is a chapter and gets a directory named after its link text.

Example
-------
>>> from confluence_md.converter.tree import parse_markup
>>> toc = parse_markup(
...     '<div><ul><li><a href="Home.html">Home</a><ul>'
...     '<li><a href="Setup.html">Setup</a></li>'
...     '</ul></li></ul></div>'
... ).select_one("div > ul > li")
>>> resolve_navigation(toc)
{'Setup.html': 'Home', 'Home.html': 'Home', 'index.html': ''}
"""

from __future__ import annotations

import posixpath
import typing as typ

from confluence_md._constants import INDEX_FILENAME

from .page import normalize_file_name

if typ.TYPE_CHECKING:
    from bs4 import Tag

    from .page import Page, PageSet

TOC_SELECTOR = "div > ul > li"
LIST_TAGS = frozenset({"ul", "ol", "li"})

NavigationMap = dict[str, str]


def _extend(path: str, name: str) -> str:
    return posixpath.join(path, name) if name else path


def _descend(
    node: Tag, current_path: str, mapping: NavigationMap
) -> tuple[NavigationMap, bool]:
    """Map the links below ``node`` and report whether ``node`` is a chapter.

    Parameters
    ----------
    node : Tag
        List or list item whose element children are walked in order.
    current_path : str
        Directory that pages directly under ``node`` belong to.
    mapping : NavigationMap
        Accumulated ``href -> directory`` entries.

    Returns
    -------
    tuple[NavigationMap, bool]
        The updated mapping and ``True`` when ``node`` registered a link or
        contains a nested chapter.
    """
    link_href: str | None = None
    link_text = ""
    has_chapter = False
    for child in node.find_all(True, recursive=False):
        if child.name == "a":
            link_href = child.get("href")
            link_text = normalize_file_name(child.get_text()).strip()
        elif child.name in LIST_TAGS:
            mapping, child_is_chapter = _descend(
                child, _extend(current_path, link_text), mapping
            )
            has_chapter = has_chapter or child_is_chapter

    if link_href:
        mapping[link_href] = (
            _extend(current_path, link_text) if has_chapter else current_path
        )
    return mapping, bool(link_href) or has_chapter


def resolve_navigation(
    toc: Tag | None, root_href: str = INDEX_FILENAME
) -> NavigationMap:
    """Return ``href -> directory`` for every link in the table of contents.

    The root page is always mapped to the top level, overriding any entry the
    walk produced for it. ``toc`` may be ``None`` when a root page has no
    table of contents, in which case only the root page is mapped.
    """
    mapping: NavigationMap = {}
    if toc is not None:
        mapping, _ = _descend(toc, "", mapping)
    mapping[root_href] = ""
    return mapping


def build_navigation_map(index_page: Page) -> NavigationMap:
    """Resolve the navigation map from a space's root page."""
    return resolve_navigation(
        index_page.soup.select_one(TOC_SELECTOR), root_href=index_page.file_name
    )


def build_navigation_maps(pages: PageSet) -> dict[str, NavigationMap]:
    """Return the navigation map of every space that has a root page."""
    return {
        space: build_navigation_map(index_page)
        for space, index_page in pages.index_pages.items()
    }


__all__ = [
    "TOC_SELECTOR",
    "NavigationMap",
    "build_navigation_map",
    "build_navigation_maps",
    "resolve_navigation",
]
