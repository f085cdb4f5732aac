"""Cyclopts CLI entrypoint for building the blog.

The ``sillage`` console script defined here reads ``config/site.yaml``, runs
the full plugin chain over the source tree, and writes the rendered site.
Every option can also be supplied through a ``SILLAGE_``-prefixed environment
variable, which keeps CI invocations short.

Examples
--------
Build with the default configuration:

>>> from sillage_pages.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory with debug logging:

>>> from sillage_pages.cli import app
>>> app(["build", "--destination", "dist", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import SiteBuilder
from .config import load_site_config

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="sillage", config=cyclopts.config.Env("SILLAGE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:
            return str(path)
    return str(path)


@app.command(help="Build the static site from Markdown sources.")
def build(
    *,
    config: typ.Annotated[Path, Parameter(help="Path to site config")] = DEFAULT_CONFIG,
    source: typ.Annotated[
        Path | None, Parameter(help="Override the source directory")
    ] = None,
    destination: typ.Annotated[
        Path | None, Parameter(help="Override the output directory")
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log per-file plugin progress")
    ] = False,
) -> None:
    """Build the site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``SILLAGE_CONFIG``).
    source : Path or None, optional
        Replace the configured source directory.
    destination : Path or None, optional
        Replace the configured output directory.
    verbose : bool, optional
        Emit DEBUG logging from the pipeline and plugins.

    Returns
    -------
    None
        Writes the rendered site and prints each written path.

    Raises
    ------
    BuildError
        If a plugin fails; the build is aborted and nothing is written.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    site_config = load_site_config(config)
    if source is not None:
        site_config = dc.replace(site_config, source=source)
    if destination is not None:
        site_config = dc.replace(site_config, destination=destination)

    for path in SiteBuilder(site_config).run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``sillage`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
