"""Resolve and render pages of the versioned Gazebo documentation.

This package builds the ordered page tree for a docs version, locates the
requested page, and renders its markdown into version-aware HTML together
with a table of contents. The ``gzdocs`` console script wraps the pipeline.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from gz_docs import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
