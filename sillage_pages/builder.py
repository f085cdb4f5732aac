"""Assemble the blog's plugin chain and run a full build.

:class:`SiteBuilder` turns a :class:`~sillage_pages.config.SiteConfig` into a
configured :class:`~sillage_pages.pipeline.Pipeline`. The chain mirrors the
blog's publishing order:

1. drop drafts,
2. render Markdown,
3. extract teasers,
4. wrap headings in sections,
5. link images to their source,
6. build collections,
7. link stories,
8. apply page templates.

Typical usage pairs the loader with the builder:

>>> from pathlib import Path
>>> from sillage_pages.builder import SiteBuilder
>>> from sillage_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> SiteBuilder(site).run()  # doctest: +SKIP
[PosixPath('build/index.html'), ...]

Side effects include reading the source tree and replacing the destination
directory when ``clean`` is enabled.
"""

from __future__ import annotations

import typing as typ

from .pipeline import Pipeline
from .plugins import (
    CollectionsPlugin,
    DraftsPlugin,
    ImageLinksPlugin,
    LayoutsPlugin,
    MarkdownPlugin,
    MorePlugin,
    SectionsPlugin,
    StoriesPlugin,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig


class SiteBuilder:
    """Build the static site described by a :class:`SiteConfig`."""

    def __init__(self, config: SiteConfig) -> None:
        self.config = config

    def pipeline(self) -> Pipeline:
        """Return a pipeline with the full plugin chain registered."""
        config = self.config
        pipeline = Pipeline(
            config.source,
            config.destination,
            metadata={"site": config.metadata},
            clean=config.clean,
        )
        if config.drafts:
            pipeline.use(DraftsPlugin())
        return (
            pipeline.use(MarkdownPlugin(config.markdown))
            .use(MorePlugin())
            .use(SectionsPlugin(config.sections))
            .use(ImageLinksPlugin(config.imglinks))
            .use(CollectionsPlugin(config.collections))
            .use(StoriesPlugin())
            .use(LayoutsPlugin(config.templates))
        )

    def run(self) -> list[Path]:
        """Build the site and return the written paths.

        Raises
        ------
        FileNotFoundError
            If the configured source directory does not exist.
        BuildError
            If any plugin fails; nothing is written in that case.
        """
        return self.pipeline().build()


__all__ = ["SiteBuilder"]
