"""BeautifulSoup helpers shared by the normalizer passes.

Every pass receives a :class:`ContentRegion` explicitly instead of reaching
for a module-level parser. A region is an ordered list of root elements taken
from one parsed page; selectors run against the descendants of those roots and
mutations happen in place.
"""

from __future__ import annotations

import itertools
import typing as typ

from bs4 import BeautifulSoup, NavigableString, Tag

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bs4 import PageElement

PARSER = "html.parser"
HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse ``markup`` into a mutable BeautifulSoup tree."""
    return BeautifulSoup(markup, PARSER)


def markup_nodes(markup: str) -> list[PageElement]:
    """Return the top-level nodes parsed from an HTML fragment."""
    fragment = parse_markup(markup)
    return [node.extract() for node in list(fragment.contents)]


def inner_html(element: Tag) -> str:
    """Return the serialized children of ``element``."""
    return element.decode_contents()


def replace_with_text(element: Tag) -> None:
    """Replace ``element`` with a plain text node holding its text content."""
    element.replace_with(NavigableString(element.get_text()))


def replace_with_markup(element: Tag, markup: str) -> None:
    """Replace ``element`` with the nodes parsed from ``markup``."""
    nodes = markup_nodes(markup)
    if nodes:
        element.replace_with(*nodes)
    else:
        element.extract()


class ContentRegion:
    """Ordered set of root elements that make up a page's substantive content.

    Parameters
    ----------
    roots : Iterable[Tag]
        Root elements of the region. A whole parsed document may be passed as
        a single root.

    Examples
    --------
    >>> region = ContentRegion.from_markup("<p><span>hi</span></p>")
    >>> [tag.name for tag in region.select("span")]
    ['span']
    >>> region.html()
    '<p><span>hi</span></p>'
    """

    def __init__(self, roots: cabc.Iterable[Tag]) -> None:
        self._roots = list(roots)

    @classmethod
    def from_markup(cls, markup: str) -> ContentRegion:
        """Build a region whose single root is the parsed ``markup``."""
        return cls([parse_markup(markup)])

    @property
    def roots(self) -> list[Tag]:
        """Return the roots that are still attached to their document."""
        return [root for root in self._roots if _is_attached_root(root)]

    def select(self, selector: str) -> cabc.Iterator[Tag]:
        """Yield descendants matching ``selector`` in document order.

        Matches are collected up front; an element detached by an earlier
        mutation during iteration is skipped.
        """
        matches = list(
            itertools.chain.from_iterable(root.select(selector) for root in self.roots)
        )
        for element in matches:
            if self.contains(element):
                yield element

    def contains(self, element: Tag) -> bool:
        """Return ``True`` when ``element`` still hangs below a live root."""
        roots = self.roots
        for node in itertools.chain([element], element.parents):
            if any(node is root for root in roots):
                return node is not element
        return False

    def text(self) -> str:
        """Return the concatenated text content of every root."""
        return "".join(root.get_text() for root in self.roots)

    def html(self) -> str:
        """Return the concatenated inner HTML of every root."""
        return "".join(inner_html(root) for root in self.roots)

    def __len__(self) -> int:
        return len(self.roots)


def _is_attached_root(root: Tag) -> bool:
    return isinstance(root, BeautifulSoup) or root.parent is not None


__all__ = [
    "HEADING_SELECTOR",
    "PARSER",
    "ContentRegion",
    "inner_html",
    "markup_nodes",
    "parse_markup",
    "replace_with_markup",
    "replace_with_text",
]
