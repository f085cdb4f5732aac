"""Load and validate the blog's site configuration YAML.

This subpackage parses ``config/site.yaml``, resolves the source and
destination directories relative to the file, and produces typed dataclasses
(:class:`SiteConfig`, :class:`SectionsConfig`, etc.) that the plugins receive
at construction time. The primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from sillage_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.sections.nested  # doctest: +SKIP
False
"""

from .loader import load_site_config
from .models import (
    CollectionConfig,
    ImageLinksConfig,
    MarkdownConfig,
    SectionsConfig,
    SiteConfig,
    SiteConfigError,
    TemplateConfig,
)

__all__ = [
    "CollectionConfig",
    "ImageLinksConfig",
    "MarkdownConfig",
    "SectionsConfig",
    "SiteConfig",
    "SiteConfigError",
    "TemplateConfig",
    "load_site_config",
]
