"""Shared dataclasses used by the conversion pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Outcome of running the normalizer passes over one page.

    Attributes
    ----------
    html : str
        Serialized HTML of the cleaned content region.
    requires_post_processing : bool
        ``True`` when a panel marker or a pipe-table block was emitted and the
        rendered Markdown needs the text-level post-processing pass.
    """

    html: str
    requires_post_processing: bool


__all__ = ["NormalizationResult"]
