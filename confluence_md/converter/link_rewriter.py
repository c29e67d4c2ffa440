"""Helpers for rewriting links between exported pages to generated Markdown."""

from __future__ import annotations

import logging
import posixpath
import re
import typing as typ
from urllib.parse import urlsplit

from confluence_md._constants import SOURCE_EXTENSION, TARGET_EXTENSION

from .tree import replace_with_text

if typ.TYPE_CHECKING:
    from .page import PageSet
    from .tree import ContentRegion

logger = logging.getLogger(__name__)

PAGE_ID_PATTERN = re.compile(r".*pageId=(\d+).*")
CREATE_LINK_CLASS = "createlink"
CREATE_PAGE_ACTION = "createpage.action"


class LocalLinkRewriter:
    """Re-target anchors that point at exported pages.

    Links to pages that are part of the converted set are rewritten to the
    generated file name (same space) or to the ``../<space>/<file>`` path
    (other spaces). The Markdown extension is dropped because the target wiki
    resolves pages without it. Anything else is left untouched.
    """

    def __init__(
        self,
        pages: PageSet,
        *,
        source_extension: str = SOURCE_EXTENSION,
        target_extension: str = TARGET_EXTENSION,
    ) -> None:
        self.pages = pages
        self.source_extension = source_extension
        self.target_extension = target_extension

    def apply(self, region: ContentRegion, space: str) -> ContentRegion:
        """Rewrite every anchor in ``region`` for a page living in ``space``.

        The region need not have been through attribute stripping: anchors
        without ``href`` and anchors carrying the ``createlink`` class are
        flattened to their text here as well.
        """
        for anchor in region.select("a"):
            href = anchor.get("href")
            if href is None:
                logger.debug('No href for link with text "%s"', anchor.get_text())
                replace_with_text(anchor)
            elif _is_create_page_link(anchor.get("class", []), href):
                replace_with_text(anchor)
            else:
                rewritten = self.rewrite(href, space)
                if rewritten is not None:
                    anchor["href"] = rewritten
        return region

    def rewrite(self, href: str, space: str) -> str | None:
        """Return the new target for ``href`` or ``None`` to keep it as is.

        Parameters
        ----------
        href : str
            Original link target taken from the export.
        space : str
            Space of the page that contains the link.

        Returns
        -------
        str | None
            Relative link to the generated page without its extension, or
            ``None`` for external links and pages outside the converted set.
        """
        parsed = urlsplit(href)
        file_name = posixpath.basename(parsed.path)
        if (
            file_name.endswith(self.source_extension)
            and not parsed.scheme
            and not parsed.netloc
        ):
            base_name = file_name[: -len(self.source_extension)]
            page = self.pages.find_by_base_name(base_name, space=space)
            if page is None:
                logger.warning("No converted page matches link '%s'", href)
                return None
            target = page.file_name_new if page.space == space else page.space_path
            target = self._strip_extension(target)
            return f"{target}#{parsed.fragment}" if parsed.fragment else target

        match = PAGE_ID_PATTERN.match(href)
        if match:
            page = self.pages.find_by_base_name(match.group(1))
            if page is None:
                return None
            return self._strip_extension(page.space_path)
        return None

    def _strip_extension(self, target: str) -> str:
        if target.endswith(self.target_extension):
            return target[: -len(self.target_extension)]
        return target


def _is_create_page_link(classes: list[str], href: str) -> bool:
    """Return True for placeholders that link to a page that was never created."""
    return CREATE_LINK_CLASS in classes or CREATE_PAGE_ACTION in href


__all__ = ["LocalLinkRewriter", "PAGE_ID_PATTERN"]
