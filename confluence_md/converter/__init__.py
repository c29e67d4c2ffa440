"""Normalize, place, and render exported wiki pages as Markdown."""

from .link_rewriter import LocalLinkRewriter
from .models import NormalizationResult
from .navigation import build_navigation_map, build_navigation_maps, resolve_navigation
from .page import Page, PageSet, normalize_file_name
from .postprocess import post_process
from .renderer import PandocRenderer, RendererNotFoundError, RenderResult
from .space_converter import SpaceConverter, load_pages
from .tree import ContentRegion

__all__ = [
    "ContentRegion",
    "LocalLinkRewriter",
    "NormalizationResult",
    "PandocRenderer",
    "Page",
    "PageSet",
    "RenderResult",
    "RendererNotFoundError",
    "SpaceConverter",
    "build_navigation_map",
    "build_navigation_maps",
    "load_pages",
    "normalize_file_name",
    "post_process",
    "resolve_navigation",
]
