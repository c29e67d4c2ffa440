"""Load and validate converter configuration for confluence_md runs.

This subpackage parses an optional ``confluence-md.yaml`` file, merges it with
command-line overrides, and produces :class:`ConverterConfig` dataclasses that
the converter consumes. The primary entry point is
:func:`load_converter_config`.

Examples
--------
>>> from pathlib import Path
>>> from confluence_md.config import load_converter_config
>>> config = load_converter_config(Path("confluence-md.yaml"))  # doctest: +SKIP
>>> config.pandoc.output_format  # doctest: +SKIP
'markdown_github'
"""

from .helpers import VERBOSITY_LEVELS
from .loader import load_converter_config
from .models import ConverterConfig, ConverterConfigError, PandocConfig

__all__ = [
    "VERBOSITY_LEVELS",
    "ConverterConfig",
    "ConverterConfigError",
    "PandocConfig",
    "load_converter_config",
]
