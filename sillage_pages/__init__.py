"""Static-site build pipeline for the "au mouvant sillage" blog.

This package turns Markdown posts with YAML front matter into a themed HTML
site. A synchronous plugin chain renders Markdown, wraps heading-delimited
content in ``<section>`` elements, links images, groups same-titled posts into
stories with previous/next/home navigation, and applies Jinja templates.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from sillage_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
