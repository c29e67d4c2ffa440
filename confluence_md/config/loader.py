"""Load converter configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_pandoc_config,
    _normalize_extension,
    _resolve_verbosity,
    _string_list,
)
from .models import ConverterConfig


def load_converter_config(
    path: Path | None = None, **overrides: typ.Any
) -> ConverterConfig:
    """Load the YAML configuration describing a conversion run.

    Parameters
    ----------
    path : Path, optional
        Filesystem path to the YAML configuration file. When ``None`` the
        built-in defaults are used.
    **overrides
        Top-level values that take precedence over the file (for example the
        ``verbosity`` passed on the command line). ``None`` values are ignored.

    Returns
    -------
    ConverterConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConverterConfigError
        If a value is invalid, such as an unknown verbosity level.

    Examples
    --------
    >>> load_converter_config(verbosity="debug").verbosity
    'debug'
    """
    raw: dict[str, typ.Any] = {}
    if path is not None:
        if not path.exists():
            msg = f"Configuration file '{path}' not found."
            raise FileNotFoundError(msg)
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
        if not isinstance(loaded, dict):
            msg = "Top-level YAML structure must be a mapping."
            raise TypeError(msg)
        raw = dict(loaded)

    raw.update({key: value for key, value in overrides.items() if value is not None})
    defaults = ConverterConfig()

    pandoc = _build_pandoc_config(raw.get("pandoc"))
    if raw.get("pandoc_executable"):
        pandoc = dc.replace(pandoc, executable=str(raw["pandoc_executable"]))

    assets_raw = raw.get("assets")
    assets = (
        _string_list(assets_raw, field="assets")
        if assets_raw is not None
        else defaults.assets
    )

    return ConverterConfig(
        verbosity=_resolve_verbosity(raw.get("verbosity", defaults.verbosity)),
        convert_index=bool(raw.get("convert_index", defaults.convert_index)),
        write_global_index=bool(
            raw.get("write_global_index", defaults.write_global_index)
        ),
        pandoc=pandoc,
        assets=assets,
        source_extension=_normalize_extension(
            raw.get("source_extension", defaults.source_extension),
            field="source_extension",
        ),
        target_extension=_normalize_extension(
            raw.get("target_extension", defaults.target_extension),
            field="target_extension",
        ),
    )


__all__ = ["load_converter_config"]
