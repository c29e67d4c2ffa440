"""Page entities for exported HTML files and the set they form within a run."""

from __future__ import annotations

import functools
import re
import typing as typ

from confluence_md._constants import (
    INDEX_STEM,
    SOURCE_EXTENSION,
    TARGET_EXTENSION,
)

from . import normalizer
from .link_rewriter import LocalLinkRewriter
from .models import NormalizationResult
from .tables import reconstruct_tables
from .tree import parse_markup

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from bs4 import BeautifulSoup

UNSAFE_FILENAME_PATTERN = re.compile(r"[\\/():;<?.&]")
PREFIX_SEPARATOR = " - "
PREFIX_SEPARATOR_LIMIT = 10
BREADCRUMB_ROOT_SELECTOR = "#breadcrumbs .first"


def normalize_file_name(name: str) -> str:
    """Return ``name`` with path-unsafe characters replaced and prefix dropped.

    A ``" - "`` separator found within the first ten characters marks a
    prefix (for example a space key) that is removed along with the separator.

    Examples
    --------
    >>> normalize_file_name("DEV - Coding standards")
    'Coding standards'
    >>> normalize_file_name("Build and deploy - part 2")
    'Build and deploy - part 2'
    >>> normalize_file_name("Q&A: setup/teardown")
    'Q_A_ setup_teardown'
    """
    normalized = UNSAFE_FILENAME_PATTERN.sub("_", name)
    index = normalized.find(PREFIX_SEPARATOR)
    if 0 < index < PREFIX_SEPARATOR_LIMIT:
        return normalized[index + len(PREFIX_SEPARATOR) :]
    return normalized


class Page:
    """One exported HTML file and the identity derived from it.

    Parameters
    ----------
    path : Path
        Absolute path to the exported file. Its parent directory name is the
        page's space.
    source_extension : str, optional
        Extension of exported pages, ``.html`` by default.
    target_extension : str, optional
        Extension of generated pages, ``.md`` by default.

    Notes
    -----
    The file is read and parsed once at construction. :meth:`normalize`
    reparses the stored markup, so the page itself is never mutated.
    """

    def __init__(
        self,
        path: Path,
        *,
        source_extension: str = SOURCE_EXTENSION,
        target_extension: str = TARGET_EXTENSION,
    ) -> None:
        self.path = path
        self.source_extension = source_extension
        self.target_extension = target_extension
        self.file_name = path.name
        self.file_base_name = (
            path.name[: -len(source_extension)]
            if path.name.endswith(source_extension)
            else path.stem
        )
        self.markup = path.read_text(encoding="utf-8")
        self.soup: BeautifulSoup = parse_markup(self.markup)
        self.heading = self._resolve_heading()
        self.file_name_new = self._resolve_file_name_new()
        self.space = path.parent.name
        self.space_path = f"../{self.space}/{self.file_name_new}"

    def __repr__(self) -> str:
        return f"Page({self.space}/{self.file_name})"

    @property
    def is_index(self) -> bool:
        """Return True for the space's root (table-of-contents) page."""
        return self.file_name == f"{INDEX_STEM}{self.source_extension}"

    def _resolve_heading(self) -> str:
        title_tag = self.soup.find("title")
        title = title_tag.get_text().strip() if title_tag is not None else ""
        if self.is_index:
            return title
        crumb = self.soup.select_one(BREADCRUMB_ROOT_SELECTOR)
        root_name = crumb.get_text().strip() if crumb is not None else ""
        if root_name:
            title = title.replace(f"{root_name} : ", "", 1)
        return title

    def _resolve_file_name_new(self) -> str:
        if self.is_index:
            return f"{INDEX_STEM}{self.target_extension}"
        stem = normalize_file_name(self.heading) or self.file_base_name
        return f"{stem}{self.target_extension}"

    def normalize(
        self, pages: PageSet, rewriter: LocalLinkRewriter | None = None
    ) -> NormalizationResult:
        """Run the normalizer passes over this page's content.

        Parameters
        ----------
        pages : PageSet
            Every page of the run, used to resolve intra-export links.
        rewriter : LocalLinkRewriter, optional
            Link rewriter to use; one bound to ``pages`` is built when omitted.

        Returns
        -------
        NormalizationResult
            Cleaned HTML and whether the rendered Markdown needs the
            post-processing pass.
        """
        rewriter = rewriter or LocalLinkRewriter(
            pages,
            source_extension=self.source_extension,
            target_extension=self.target_extension,
        )
        soup = parse_markup(self.markup)
        region = normalizer.select_region(soup, is_index=self.is_index)
        region = normalizer.fix_headline(region)
        region = normalizer.fix_icon(region)
        region = normalizer.fix_empty_link(region)
        region, note_fixed = normalizer.fix_note_panel(region)
        region, warning_fixed = normalizer.fix_warning_panel(region)
        region, info_fixed = normalizer.fix_info_panel(region)
        region = normalizer.strip_link_attributes(region)
        region = normalizer.fix_empty_heading(region)
        region = normalizer.fix_preformatted_text(region)
        region, table_fixed = reconstruct_tables(
            region,
            cell_fixes=(
                normalizer.fix_image_within_span,
                normalizer.strip_image_attributes,
                normalizer.replace_elements_with_text,
                normalizer.strip_export_classes,
                normalizer.remove_attachment_wrappers,
                functools.partial(rewriter.apply, space=self.space),
            ),
        )
        region = normalizer.fix_image_within_span(region)
        region = normalizer.strip_image_attributes(region)
        region = normalizer.replace_elements_with_text(region)
        region = normalizer.strip_export_classes(region)
        region = normalizer.remove_attachment_wrappers(region)
        region = normalizer.remove_page_log(region)
        region = rewriter.apply(region, self.space)
        region = normalizer.remove_page_title(region)
        return NormalizationResult(
            html=region.html(),
            requires_post_processing=(
                note_fixed or warning_fixed or info_fixed or table_fixed
            ),
        )


class PageSet:
    """All pages of a run with lookups by file name and base name."""

    def __init__(self, pages: cabc.Iterable[Page]) -> None:
        self._pages = list(pages)
        self._by_file_name: dict[str, Page] = {}
        for page in self._pages:
            self._by_file_name.setdefault(page.file_name, page)

    def __iter__(self) -> cabc.Iterator[Page]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def get(self, file_name: str) -> Page | None:
        """Return the first page whose original file name is ``file_name``."""
        return self._by_file_name.get(file_name)

    def find_by_base_name(
        self, base_name: str, *, space: str | None = None
    ) -> Page | None:
        """Return the page whose file name without extension is ``base_name``.

        A match in ``space`` wins over matches in other spaces; otherwise the
        first match in scan order is returned.
        """
        matches = [page for page in self._pages if page.file_base_name == base_name]
        for page in matches:
            if page.space == space:
                return page
        return matches[0] if matches else None

    @property
    def spaces(self) -> list[str]:
        """Return the space names in order of first appearance."""
        return list(dict.fromkeys(page.space for page in self._pages))

    @property
    def index_pages(self) -> dict[str, Page]:
        """Return the root page of every space that has one."""
        return {page.space: page for page in self._pages if page.is_index}


__all__ = ["Page", "PageSet", "normalize_file_name"]
