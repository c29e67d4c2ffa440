"""Fix-up passes that turn Confluence export markup into pandoc-friendly HTML.

Each pass takes a :class:`~confluence_md.converter.tree.ContentRegion`,
rewrites one structural wart in place, and returns the region. Panel passes
additionally report whether they replaced anything. A pass that finds nothing
to fix leaves the region unchanged, and running a pass on its own output is a
no-op.

The required order lives in :meth:`confluence_md.converter.page.Page.normalize`.
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup

from confluence_md._constants import PANEL_MARKER_TEMPLATE

from .tree import (
    HEADING_SELECTOR,
    ContentRegion,
    inner_html,
    replace_with_markup,
    replace_with_text,
)

if typ.TYPE_CHECKING:
    from bs4 import Tag

INDEX_CONTENT_SELECTOR = "#content"
INDEX_STRAY_TABLE_SELECTOR = "#main-content > .confluenceTable"
MAIN_CONTENT_ID = "main-content"
PAGE_CONTENT_SELECTOR = f"#{MAIN_CONTENT_ID}, .pageSection.group"
PAGE_SECTION_MARKER_SELECTOR = (
    ".pageSectionHeader > #attachments, .pageSectionHeader > #comments"
)
HEADLINE_SPAN_SELECTOR = ", ".join(
    f"{heading} span.aui-icon, {heading} span.mw-headline"
    for heading in HEADING_SELECTOR.split(", ")
)
ICON_SELECTOR = "span.aui-icon"
NOTE_PANEL_SELECTOR = "div.panel > div.panelContent"
WARNING_PANEL_SELECTOR = (
    "div.confluence-information-macro-note, div.confluence-information-macro-warning"
)
INFO_PANEL_SELECTOR = "div.confluence-information-macro"
PANEL_BODY_SELECTOR = "div.confluence-information-macro-body"
DECORATIVE_SELECTOR = "span, .user-mention"
ATTACHMENT_WIDGET_SELECTOR = ", ".join(
    [
        ".attachment-buttons",
        ".plugin_attachments_upload_container",
        "table.attachments.aui",
    ]
)
PAGE_LOG_SELECTOR = '[id$="Recentspaceactivity"], [id$="Spacecontributors"]'
PAGE_TITLE_SELECTOR = "h1.title-heading, #title-heading"
SYNTAX_PARAMS_ATTRIBUTE = "data-syntaxhighlighter-params"
EXPORT_CLASS_PATTERN = re.compile(
    r"^(confluence-\S+|external-link|uri|tablesorter-header-inner|odd|even|header)$"
)


def select_region(soup: BeautifulSoup, *, is_index: bool) -> ContentRegion:
    """Return the substantive content region of a parsed page.

    The root page keeps ``#content`` minus the stray table Confluence places
    at the top of it. Other pages keep ``#main-content`` and, when present,
    the attachments and comments sections.
    """
    if is_index:
        content = soup.select_one(INDEX_CONTENT_SELECTOR)
        if content is None:
            return ContentRegion([])
        for table in content.select(INDEX_STRAY_TABLE_SELECTOR):
            table.extract()
        return ContentRegion([content])
    return ContentRegion(
        element
        for element in soup.select(PAGE_CONTENT_SELECTOR)
        if element.get("id") == MAIN_CONTENT_ID
        or element.select_one(PAGE_SECTION_MARKER_SELECTOR) is not None
    )


def _replace_matches_with_text(region: ContentRegion, selector: str) -> ContentRegion:
    for element in region.select(selector):
        replace_with_text(element)
    return region


def _remove_matches(region: ContentRegion, selector: str) -> ContentRegion:
    for element in region.select(selector):
        element.extract()
    return region


def fix_headline(region: ContentRegion) -> ContentRegion:
    """Unwrap icon and headline spans nested inside headings."""
    return _replace_matches_with_text(region, HEADLINE_SPAN_SELECTOR)


def fix_icon(region: ContentRegion) -> ContentRegion:
    """Replace inline icon spans with their text."""
    return _replace_matches_with_text(region, ICON_SELECTOR)


def fix_empty_link(region: ContentRegion) -> ContentRegion:
    """Remove anchors that have neither visible text nor an image."""
    for anchor in region.select("a"):
        if not anchor.get_text().strip() and anchor.find("img") is None:
            anchor.extract()
    return region


def _panel_markup(kind: str, body: str) -> str:
    marker = PANEL_MARKER_TEMPLATE.format(kind=kind)
    return f"<blockquote>{marker}<br/>{body}</blockquote>"


def fix_note_panel(region: ContentRegion) -> tuple[ContentRegion, bool]:
    """Turn ``div.panel`` macros into ``==!note==`` blockquotes.

    Code panels share the ``panelContent`` markup and are left alone.
    """
    fixed = False
    for content in reversed(list(region.select(NOTE_PANEL_SELECTOR))):
        if "codeContent" in content.get("class", []) or not region.contains(content):
            continue
        replace_with_markup(content.parent, _panel_markup("note", inner_html(content)))
        fixed = True
    return region, fixed


def _fix_information_macro(
    region: ContentRegion, selector: str, kind: str, *, trailer: str = ""
) -> tuple[ContentRegion, bool]:
    fixed = False
    for macro in reversed(list(region.select(selector))):
        if not region.contains(macro):
            continue
        body = macro.select_one(PANEL_BODY_SELECTOR)
        body_html = inner_html(body) if body is not None else ""
        replace_with_markup(macro, _panel_markup(kind, body_html) + trailer)
        fixed = True
    return region, fixed


def fix_warning_panel(region: ContentRegion) -> tuple[ContentRegion, bool]:
    """Turn note/warning information macros into ``==!warning==`` blockquotes.

    An empty paragraph follows the blockquote so consecutive panels are not
    merged into one quote by pandoc.
    """
    return _fix_information_macro(
        region, WARNING_PANEL_SELECTOR, "warning", trailer="<p>&nbsp;</p>"
    )


def fix_info_panel(region: ContentRegion) -> tuple[ContentRegion, bool]:
    """Turn the remaining information macros into ``==!info==`` blockquotes."""
    return _fix_information_macro(region, INFO_PANEL_SELECTOR, "info")


def strip_link_attributes(region: ContentRegion) -> ContentRegion:
    """Keep only ``href`` on anchors; unwrap anchors that have none."""
    for anchor in region.select("a"):
        href = anchor.get("href")
        if href:
            anchor.attrs = {"href": href}
        else:
            anchor.unwrap()
    return region


def fix_empty_heading(region: ContentRegion) -> ContentRegion:
    """Remove headings whose text is empty."""
    for heading in region.select(HEADING_SELECTOR):
        if not heading.get_text().strip():
            heading.extract()
    return region


def _brush(params: str | None) -> str | None:
    """Return the ``brush`` entry of a syntax-highlighter parameter string."""
    for entry in (params or "").split(";"):
        key, _, value = entry.partition(":")
        if key.strip() == "brush" and value.strip():
            return value.strip()
    return None


def fix_preformatted_text(region: ContentRegion) -> ContentRegion:
    """Replace highlighter classes on ``<pre>`` with the plain language name."""
    for pre in region.select("pre"):
        brush = _brush(pre.get(SYNTAX_PARAMS_ATTRIBUTE))
        if brush:
            pre["class"] = [brush]
        elif "class" in pre.attrs:
            del pre["class"]
    return region


def fix_image_within_span(region: ContentRegion) -> ContentRegion:
    """Unwrap spans that contain an image and no text."""
    for span in region.select("span:has(img)"):
        if not span.get_text().strip():
            span.unwrap()
    return region


def strip_image_attributes(region: ContentRegion) -> ContentRegion:
    """Reduce images without alt text to a query-free ``src``."""
    for image in region.select("img"):
        if (image.get("alt") or "").strip():
            continue
        src = image.get("src")
        if src is None:
            continue
        query_start = src.find("?")
        if query_start > 0:
            src = src[:query_start]
        image.attrs = {"src": src}
    return region


def replace_elements_with_text(region: ContentRegion) -> ContentRegion:
    """Replace decorative spans and user mentions with their text."""
    return _replace_matches_with_text(region, DECORATIVE_SELECTOR)


def _strip_export_classes(element: Tag) -> None:
    kept = [
        name
        for name in element.get("class", [])
        if not EXPORT_CLASS_PATTERN.match(name)
    ]
    if kept:
        element["class"] = kept
    else:
        del element["class"]


def strip_export_classes(region: ContentRegion) -> ContentRegion:
    """Drop export-tool class names from every element."""
    for element in region.select("[class]"):
        _strip_export_classes(element)
    return region


def remove_attachment_wrappers(region: ContentRegion) -> ContentRegion:
    """Delete attachment action buttons, the upload dropzone, and overview table."""
    return _remove_matches(region, ATTACHMENT_WIDGET_SELECTOR)


def remove_page_log(region: ContentRegion) -> ContentRegion:
    """Delete the recent-activity and contributors widgets with their section."""
    for marker in region.select(PAGE_LOG_SELECTOR):
        section = marker.parent
        if (
            section is None
            or isinstance(section, BeautifulSoup)
            or any(section is root for root in region.roots)
        ):
            marker.extract()
        else:
            section.extract()
    return region


def remove_page_title(region: ContentRegion) -> ContentRegion:
    """Delete the page's own title heading."""
    return _remove_matches(region, PAGE_TITLE_SELECTOR)


__all__ = [
    "fix_empty_heading",
    "fix_empty_link",
    "fix_headline",
    "fix_icon",
    "fix_image_within_span",
    "fix_info_panel",
    "fix_note_panel",
    "fix_preformatted_text",
    "fix_warning_panel",
    "remove_attachment_wrappers",
    "remove_page_log",
    "remove_page_title",
    "replace_elements_with_text",
    "select_region",
    "strip_export_classes",
    "strip_image_attributes",
    "strip_link_attributes",
]
