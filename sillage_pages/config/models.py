"""Typed dataclasses describing the blog build configuration."""

from __future__ import annotations

import dataclasses as dc
import re  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path

DEFAULT_QUOTES = ("&laquo;&nbsp;", "&nbsp;&raquo;", "&lsaquo;&nbsp;", "&nbsp;&rsaquo;")


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SectionsConfig:
    """Options for wrapping heading-delimited content in ``<section>``.

    Attributes
    ----------
    level : int or None
        Deepest heading level that opens a section; ``None`` means every
        heading level does.
    nested : bool
        Nest sections by heading depth when true, otherwise keep every
        section at the top level.
    """

    level: int | None = None
    nested: bool = True


@dc.dataclass(slots=True)
class ImageLinksConfig:
    """Options for wrapping images in links to their source."""

    enabled: bool = True
    pattern: re.Pattern[str] | None = None


@dc.dataclass(slots=True)
class MarkdownConfig:
    """Markdown rendering options."""

    pygments_style: str = "default"
    quotes: tuple[str, str, str, str] = DEFAULT_QUOTES


@dc.dataclass(slots=True)
class TemplateConfig:
    """Jinja environment settings handed to the layouts plugin."""

    directory: Path | None = None
    default_template: str = "post.jinja"
    autoescape: bool = False


@dc.dataclass(slots=True)
class CollectionConfig:
    """Sorting rules for a named collection."""

    name: str
    sort_by: str = "date"
    reverse: bool = True


@dc.dataclass(slots=True)
class SiteConfig:
    """Fully resolved build configuration."""

    source: Path
    destination: Path
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)
    sections: SectionsConfig = dc.field(default_factory=SectionsConfig)
    imglinks: ImageLinksConfig = dc.field(default_factory=ImageLinksConfig)
    markdown: MarkdownConfig = dc.field(default_factory=MarkdownConfig)
    templates: TemplateConfig = dc.field(default_factory=TemplateConfig)
    collections: dict[str, CollectionConfig] = dc.field(default_factory=dict)
    drafts: bool = True
    clean: bool = True


__all__ = [
    "DEFAULT_QUOTES",
    "CollectionConfig",
    "ImageLinksConfig",
    "MarkdownConfig",
    "SectionsConfig",
    "SiteConfig",
    "SiteConfigError",
    "TemplateConfig",
]
