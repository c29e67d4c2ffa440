"""Typed dataclasses describing converter configuration structures."""

from __future__ import annotations

import dataclasses as dc

from confluence_md._constants import (
    DEFAULT_ASSET_DIRS,
    SOURCE_EXTENSION,
    TARGET_EXTENSION,
)


class ConverterConfigError(ValueError):
    """Raised when the converter configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PandocConfig:
    """Command-line settings for the external pandoc renderer."""

    executable: str = "pandoc"
    input_format: str = "html"
    output_format: str = "markdown_github"
    extra_args: list[str] = dc.field(default_factory=lambda: ["--wrap=none"])


@dc.dataclass(slots=True)
class ConverterConfig:
    """Top-level settings for a conversion run.

    Attributes
    ----------
    verbosity : str
        Log level name, one of ``debug``, ``info``, ``warning`` or ``error``.
    convert_index : bool
        Whether each space's root page is rendered to ``index.md`` in addition
        to serving as the navigation source.
    write_global_index : bool
        Whether a top-level ``index.md`` linking every space is written when
        the source is a directory containing at least one root page.
    pandoc : PandocConfig
        Renderer invocation settings.
    assets : list[str]
        Names of asset directories copied next to the generated Markdown.
    source_extension : str
        File extension of exported pages.
    target_extension : str
        File extension of generated pages.
    """

    verbosity: str = "info"
    convert_index: bool = True
    write_global_index: bool = True
    pandoc: PandocConfig = dc.field(default_factory=PandocConfig)
    assets: list[str] = dc.field(default_factory=lambda: list(DEFAULT_ASSET_DIRS))
    source_extension: str = SOURCE_EXTENSION
    target_extension: str = TARGET_EXTENSION


__all__ = ["ConverterConfig", "ConverterConfigError", "PandocConfig"]
