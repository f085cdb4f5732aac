"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from .models import (
    DEFAULT_QUOTES,
    CollectionConfig,
    ImageLinksConfig,
    MarkdownConfig,
    SectionsConfig,
    SiteConfigError,
    TemplateConfig,
)


def _mapping(value: object, name: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{name}' must be a mapping."
        raise SiteConfigError(msg)
    return value


def _require_bool(value: object, name: str) -> bool:
    """Return ``value`` when it is a boolean, otherwise raise."""
    if not isinstance(value, bool):
        msg = f"'{name}' must be true or false, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _resolve_path(value: object, base_dir: Path) -> Path:
    """Resolve ``value`` against ``base_dir`` unless it is absolute."""
    path = Path(str(value))
    return path if path.is_absolute() else base_dir / path


def _build_sections_config(payload: object) -> SectionsConfig:
    """Build a SectionsConfig, validating the heading level cutoff."""
    data = _mapping(payload, "sections")
    level = data.get("level")
    if level is not None and (
        isinstance(level, bool) or not isinstance(level, int) or level < 1
    ):
        msg = f"'sections.level' must be an integer >= 1, got {level!r}."
        raise SiteConfigError(msg)
    nested = _require_bool(data.get("nested", True), "sections.nested")
    return SectionsConfig(level=level, nested=nested)


def _build_imglinks_config(payload: object) -> ImageLinksConfig:
    """Build an ImageLinksConfig, compiling the optional ``filter`` regex."""
    data = _mapping(payload, "imglinks")
    enabled = _require_bool(data.get("enabled", True), "imglinks.enabled")
    raw_filter = data.get("filter")
    pattern = None
    if raw_filter:
        try:
            pattern = re.compile(str(raw_filter))
        except re.error as exc:
            msg = f"'imglinks.filter' is not a valid regular expression: {exc}"
            raise SiteConfigError(msg) from exc
    return ImageLinksConfig(enabled=enabled, pattern=pattern)


def _build_markdown_config(payload: object) -> MarkdownConfig:
    """Build a MarkdownConfig with four smart-quote substitutions."""
    data = _mapping(payload, "markdown")
    quotes = data.get("quotes")
    if quotes is None:
        quotes = DEFAULT_QUOTES
    if not isinstance(quotes, list | tuple) or len(quotes) != 4:
        msg = "'markdown.quotes' must list exactly four strings."
        raise SiteConfigError(msg)
    return MarkdownConfig(
        pygments_style=str(data.get("pygments_style", "default")),
        quotes=tuple(str(quote) for quote in quotes),  # type: ignore[arg-type]
    )


def _build_template_config(payload: object, base_dir: Path) -> TemplateConfig:
    """Build a TemplateConfig, resolving the template directory."""
    data = _mapping(payload, "templates")
    directory = data.get("directory")
    return TemplateConfig(
        directory=_resolve_path(directory, base_dir) if directory else None,
        default_template=str(data.get("default", "post.jinja")),
        autoescape=_require_bool(data.get("autoescape", False), "templates.autoescape"),
    )


def _build_collections(payload: object) -> dict[str, CollectionConfig]:
    """Build collection sorting rules keyed by collection name."""
    data = _mapping(payload, "collections")
    result: dict[str, CollectionConfig] = {}
    for name, options in data.items():
        settings = _mapping(options, f"collections.{name}")
        result[str(name)] = CollectionConfig(
            name=str(name),
            sort_by=str(settings.get("sort_by", "date")),
            reverse=_require_bool(
                settings.get("reverse", True), f"collections.{name}.reverse"
            ),
        )
    return result


__all__ = [
    "_build_collections",
    "_build_imglinks_config",
    "_build_markdown_config",
    "_build_sections_config",
    "_build_template_config",
    "_mapping",
    "_require_bool",
    "_resolve_path",
]
