"""Convert exported Confluence spaces into a tree of Markdown pages.

This package exposes the CLI entry points used by the ``confluence-md``
console script to convert an HTML export and to inspect the navigation
hierarchy derived from each space's table of contents.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from confluence_md import main
>>> main()  # doctest: +SKIP
>>> from confluence_md import app
>>> app.name[0]
'confluence-md'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
