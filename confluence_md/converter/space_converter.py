"""High-level orchestration for converting an exported wiki tree.

This module coordinates scanning an export for pages, resolving every space's
navigation map from its root page, normalizing each page, rendering it with
pandoc, and post-processing the Markdown. It exposes :class:`SpaceConverter`,
which consumes a :class:`~confluence_md.config.ConverterConfig`.

Example
-------
>>> from pathlib import Path
>>> from confluence_md.config import load_converter_config
>>> from confluence_md.converter import SpaceConverter
>>> converter = SpaceConverter(load_converter_config())  # doctest: +SKIP
>>> converter.run(Path("export"), Path("wiki"))  # doctest: +SKIP
[PosixPath('wiki/DEV/index.md'), ...]
"""

from __future__ import annotations

import logging
import typing as typ

from confluence_md._constants import INDEX_STEM

from .files import copy_assets, discover_files
from .link_rewriter import LocalLinkRewriter
from .navigation import NavigationMap, build_navigation_maps
from .page import Page, PageSet
from .postprocess import post_process
from .renderer import PandocRenderer
from .tree import parse_markup

if typ.TYPE_CHECKING:
    from pathlib import Path

    from confluence_md.config import ConverterConfig

    from .renderer import RenderResult

logger = logging.getLogger(__name__)


def load_pages(source: Path, config: ConverterConfig) -> PageSet:
    """Scan ``source`` for exported pages and parse each one once."""
    logger.info("Parsing files ...")
    file_paths = discover_files(source)
    logger.info("Found %d files", len(file_paths))
    return PageSet(
        Page(
            path,
            source_extension=config.source_extension,
            target_extension=config.target_extension,
        )
        for path in file_paths
        if path.name.endswith(config.source_extension)
    )


class Renderer(typ.Protocol):
    """Anything that turns HTML text into a file at ``target``."""

    def render(self, html: str, target: Path) -> RenderResult: ...


class SpaceConverter:
    """Convert every page of an export into a Markdown tree."""

    def __init__(
        self, config: ConverterConfig, *, renderer: Renderer | None = None
    ) -> None:
        """Initialize the converter.

        Parameters
        ----------
        config : ConverterConfig
            Run settings (extensions, assets, renderer options).
        renderer : Renderer, optional
            Renderer used for every page; a :class:`PandocRenderer` built from
            ``config.pandoc`` when omitted.
        """
        self.config = config
        self.renderer = renderer or PandocRenderer(config.pandoc)
        self._copied_asset_sources: set[Path] = set()

    def load_pages(self, source: Path) -> PageSet:
        """Scan ``source`` and build the page set of the run."""
        return load_pages(source, self.config)

    def run(self, source: Path, destination: Path) -> list[Path]:
        """Convert the export at ``source`` into Markdown under ``destination``.

        Returns
        -------
        list[Path]
            Markdown files that were rendered successfully, in page order.

        Raises
        ------
        FileNotFoundError
            If ``source`` does not exist.

        Notes
        -----
        The page set and all navigation maps are complete before the first
        page is converted. Each page is rendered and its assets copied before
        the next page starts.
        """
        pages = self.load_pages(source)
        navigation = build_navigation_maps(pages)
        rewriter = LocalLinkRewriter(
            pages,
            source_extension=self.config.source_extension,
            target_extension=self.config.target_extension,
        )

        written: list[Path] = []
        for page in pages:
            if page.is_index and not self.config.convert_index:
                continue
            target = self.convert_page(
                page, pages, navigation.get(page.space, {}), destination, rewriter
            )
            if target is not None:
                written.append(target)

        if source.is_dir() and self.config.write_global_index and pages.index_pages:
            index_path = self.write_global_index(
                sorted(pages.index_pages), destination
            )
            if index_path is not None:
                written.append(index_path)

        logger.info("Conversion done")
        return written

    def output_path(
        self, page: Page, navigation: NavigationMap, destination: Path
    ) -> Path:
        """Return where ``page`` lands in the output tree."""
        directory = navigation.get(page.file_name, "")
        return destination / page.space / directory / page.file_name_new

    def convert_page(
        self,
        page: Page,
        pages: PageSet,
        navigation: NavigationMap,
        destination: Path,
        rewriter: LocalLinkRewriter | None = None,
    ) -> Path | None:
        """Normalize, render, and post-process one page.

        Returns the written path, or ``None`` when rendering failed.
        """
        logger.info("Parsing ... %s", page.path)
        result = page.normalize(pages, rewriter)
        target = self.output_path(page, navigation, destination)
        logger.info("Making Markdown ... %s", target)
        ok = self.write_markdown(
            result.html,
            target,
            requires_post_processing=result.requires_post_processing,
        )
        self._copy_assets_once(page.path.parent, destination)
        logger.debug("Done %s", target)
        return target if ok else None

    def write_markdown(
        self, html: str, target: Path, *, requires_post_processing: bool = False
    ) -> bool:
        """Render ``html`` to ``target`` and apply post-processing if requested."""
        render = self.renderer.render(html, target)
        if not render.ok:
            return False
        if requires_post_processing and target.exists():
            text = target.read_text(encoding="utf-8")
            target.write_text(post_process(text), encoding="utf-8")
        return True

    def write_global_index(self, spaces: list[str], destination: Path) -> Path | None:
        """Write a top-level ``index.md`` that links to every space's root page."""
        soup = parse_markup("<ul></ul>")
        listing = soup.ul
        for space in spaces:
            href = f"{space}/{INDEX_STEM}"
            anchor = soup.new_tag("a", href=href)
            anchor.string = space
            item = soup.new_tag("li")
            item.append(anchor)
            listing.append(item)
        target = destination / f"{INDEX_STEM}{self.config.target_extension}"
        logger.info("Making Markdown ... %s", target)
        return target if self.write_markdown(str(soup), target) else None

    def _copy_assets_once(self, source_dir: Path, destination: Path) -> None:
        if source_dir in self._copied_asset_sources:
            return
        self._copied_asset_sources.add(source_dir)
        copy_assets(source_dir, destination, self.config.assets)


__all__ = ["Renderer", "SpaceConverter", "load_pages"]
