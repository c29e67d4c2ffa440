"""Utility helpers shared by the converter configuration loader."""

from __future__ import annotations

import logging
import typing as typ

from .models import ConverterConfigError, PandocConfig

VERBOSITY_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _resolve_verbosity(value: object) -> str:
    """Return the normalized verbosity name or raise for unknown levels."""
    text = str(value).strip().lower() if value is not None else ""
    if text not in VERBOSITY_LEVELS:
        msg = f"Invalid verbosity level given '{value}'."
        raise ConverterConfigError(msg)
    return text


def _normalize_extension(value: object, *, field: str) -> str:
    """Return ``value`` as a dotted file extension."""
    text = str(value or "").strip()
    if not text:
        msg = f"'{field}' must not be empty."
        raise ConverterConfigError(msg)
    return text if text.startswith(".") else f".{text}"


def _string_list(value: object, *, field: str) -> list[str]:
    """Normalize a scalar or list into a list of non-empty strings."""
    if isinstance(value, str):
        return [segment for segment in value.split() if segment]
    if isinstance(value, list):
        return [str(segment).strip() for segment in value if str(segment).strip()]
    msg = f"'{field}' must be a string or a list of strings."
    raise ConverterConfigError(msg)


def _build_pandoc_config(payload: typ.Mapping[str, typ.Any] | None) -> PandocConfig:
    """Build a PandocConfig from the optional ``pandoc`` mapping."""
    base = PandocConfig()
    if not payload:
        return base
    if not isinstance(payload, dict):
        msg = "'pandoc' must be a mapping."
        raise ConverterConfigError(msg)
    extra_args = payload.get("extra_args")
    return PandocConfig(
        executable=str(payload.get("executable", base.executable)),
        input_format=str(payload.get("input_format", base.input_format)),
        output_format=str(payload.get("output_format", base.output_format)),
        extra_args=(
            _string_list(extra_args, field="pandoc.extra_args")
            if extra_args is not None
            else base.extra_args
        ),
    )


__all__ = [
    "VERBOSITY_LEVELS",
    "_build_pandoc_config",
    "_normalize_extension",
    "_resolve_verbosity",
    "_string_list",
]
