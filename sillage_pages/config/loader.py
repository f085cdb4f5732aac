"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_collections,
    _build_imglinks_config,
    _build_markdown_config,
    _build_sections_config,
    _build_template_config,
    _mapping,
    _require_bool,
    _resolve_path,
)
from .models import SiteConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the blog build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``). Relative ``source``, ``destination`` and
        template directories are resolved against its parent directory.

    Returns
    -------
    SiteConfig
        Parsed configuration, including site metadata and per-plugin options.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section or field holds an invalid value (for example a
        ``sections.level`` below 1).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sillage_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.sections.level  # doctest: +SKIP
    2
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    return SiteConfig(
        source=_resolve_path(raw.get("source", "src"), base_dir),
        destination=_resolve_path(raw.get("destination", "build"), base_dir),
        metadata=dict(_mapping(raw.get("metadata"), "metadata")),
        sections=_build_sections_config(raw.get("sections")),
        imglinks=_build_imglinks_config(raw.get("imglinks")),
        markdown=_build_markdown_config(raw.get("markdown")),
        templates=_build_template_config(raw.get("templates"), base_dir),
        collections=_build_collections(raw.get("collections")),
        drafts=_require_bool(raw.get("drafts", True), "drafts"),
        clean=_require_bool(raw.get("clean", True), "clean"),
    )


__all__ = ["load_site_config"]
