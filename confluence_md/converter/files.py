"""Filesystem collaborators: source discovery and asset copying."""

from __future__ import annotations

import logging
import shutil
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)


def discover_files(root: Path) -> list[Path]:
    """Return every file below ``root`` (or ``root`` itself when it is a file).

    Raises
    ------
    FileNotFoundError
        If ``root`` does not exist.
    """
    if not root.exists():
        msg = f"Source '{root}' not found."
        raise FileNotFoundError(msg)
    if root.is_file():
        return [root]
    return sorted(path for path in root.rglob("*") if path.is_file())


def copy_assets(
    source_dir: Path, destination_dir: Path, names: cabc.Iterable[str]
) -> list[Path]:
    """Copy the named asset directories from ``source_dir`` into ``destination_dir``.

    Missing asset directories are skipped. Existing destination directories
    are merged into.

    Returns
    -------
    list[Path]
        Destination directories that were written.
    """
    copied: list[Path] = []
    for name in names:
        source = source_dir / name
        if not source.is_dir():
            continue
        destination = destination_dir / name
        logger.debug("Copying assets %s -> %s", source, destination)
        shutil.copytree(source, destination, dirs_exist_ok=True)
        copied.append(destination)
    return copied


__all__ = ["copy_assets", "discover_files"]
