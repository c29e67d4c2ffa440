"""Cyclopts CLI entrypoint for converting Confluence HTML exports to Markdown.

The ``confluence-md`` console script defined here converts an exported space
tree into Markdown files laid out after each space's table of contents, and
can print the navigation maps it derives without rendering anything. Typical
usage is ``confluence-md convert export/ wiki/`` once per export.

Examples
--------
Convert an export into the current directory:

>>> from confluence_md.cli import main
>>> main()  # doctest: +SKIP

Convert into a custom directory with debug logging:

>>> from confluence_md.cli import app
>>> app.run(
...     ["convert", "export", "wiki", "--verbosity", "debug"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._logging import configure_logging
from .config import load_converter_config
from .converter import SpaceConverter, build_navigation_maps, load_pages

logger = logging.getLogger(__name__)

app = App(name="confluence-md", config=cyclopts.config.Env("CONFLUENCE_MD_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Convert an exported HTML page tree into Markdown files.")
def convert(
    source: typ.Annotated[
        Path, Parameter(help="Export directory or a single exported page")
    ],
    destination: typ.Annotated[
        Path, Parameter(help="Directory that receives the Markdown tree")
    ] = Path(),
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to converter config", env_var="CONFLUENCE_MD_CONFIG"),
    ] = None,
    verbosity: typ.Annotated[
        str | None,
        Parameter(
            help="Log level: debug, info, warning or error",
            env_var="CONFLUENCE_MD_VERBOSITY",
        ),
    ] = None,
    pandoc: typ.Annotated[
        str | None,
        Parameter(help="pandoc executable to use", env_var="CONFLUENCE_MD_PANDOC"),
    ] = None,
) -> None:
    """Convert the export at ``source`` into Markdown below ``destination``.

    Parameters
    ----------
    source : Path
        Directory holding one sub-directory per space, a single space
        directory, or one exported HTML file.
    destination : Path, optional
        Output root; defaults to the current directory.
    config : Path or None, optional
        Optional YAML configuration file (``CONFLUENCE_MD_CONFIG``).
    verbosity : str or None, optional
        Overrides the configured log level.
    pandoc : str or None, optional
        Overrides the configured pandoc executable.

    Raises
    ------
    FileNotFoundError
        If ``source``, the configuration file, or pandoc cannot be found.
    ConverterConfigError
        If the configuration holds an invalid value.
    """
    converter_config = load_converter_config(
        config, verbosity=verbosity, pandoc_executable=pandoc
    )
    configure_logging(converter_config.verbosity)
    logger.info("Using source: %s", source)
    logger.info("Using destination: %s", destination)
    written = SpaceConverter(converter_config).run(source, destination)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the navigation map derived from each space's root page.")
def toc(
    source: typ.Annotated[Path, Parameter(help="Export directory")],
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to converter config", env_var="CONFLUENCE_MD_CONFIG"),
    ] = None,
) -> None:
    """Print ``space: href -> directory`` for every page in each table of contents."""
    converter_config = load_converter_config(config)
    configure_logging(converter_config.verbosity)
    pages = load_pages(source, converter_config)
    for space, mapping in sorted(build_navigation_maps(pages).items()):
        for href, directory in mapping.items():
            print(f"{space}: {href} -> {directory or '.'}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `confluence-md` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
