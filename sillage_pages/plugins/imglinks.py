"""Make images clickable by wrapping them in links to their source file."""

from __future__ import annotations

import logging
import typing as typ

from bs4 import BeautifulSoup

from sillage_pages.config import ImageLinksConfig

if typ.TYPE_CHECKING:
    import re

    from sillage_pages.pipeline import Done, Pipeline, RecordSet

logger = logging.getLogger(__name__)


def link_images(html: str, *, pattern: re.Pattern[str] | None = None) -> str:
    """Wrap each ``<img>`` in ``<a href=src target="_blank">``.

    Parameters
    ----------
    html : str
        HTML fragment to rewrite.
    pattern : re.Pattern[str], optional
        When given, only images whose ``src`` matches (``re.search``) are
        wrapped.

    Returns
    -------
    str
        The rewritten fragment. Images already inside an ``<a>`` and images
        without ``src`` are left untouched.
    """
    soup = BeautifulSoup(html, "html.parser")
    root = soup.body or soup
    images = root.find_all("img")
    logger.debug("found: %d images", len(images))
    for img in images:
        if img.parent is not None and img.parent.name == "a":
            continue
        src = img.get("src")
        if not src:
            continue
        if pattern is not None and not pattern.search(src):
            continue
        anchor = soup.new_tag("a", href=src, target="_blank")
        img.wrap(anchor)
    return root.decode_contents()


class ImageLinksPlugin:
    """Apply :func:`link_images` to every HTML record."""

    def __init__(self, config: ImageLinksConfig | None = None) -> None:
        self.config = config or ImageLinksConfig()

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Rewrite image markup in place unless the plugin is disabled."""
        if self.config.enabled:
            for path in files.html_paths():
                logger.debug("creating links for images in file: %s", path)
                record = files[path]
                record.text = link_images(record.text, pattern=self.config.pattern)
        done()


__all__ = ["ImageLinksPlugin", "link_images"]
