"""Wrap rendered posts in the site's Jinja page templates.

An HTML record is rendered through the template named by its ``template``
metadata. Records rendered from Markdown fall back to
:attr:`TemplateConfig.default_template`; other HTML files without a
``template`` key are copied through untouched.

Templates see the global pipeline metadata (``site``, ``collections``,
``pygments_css``), the record's own metadata, its decoded ``contents`` and
``path``, and a ``record(path)`` helper that resolves path references such as
``storyNext`` back into records.

Examples
--------
>>> from sillage_pages.plugins.layouts import relative_path
>>> relative_path("2015/01/b/index.html", "2015/02/a/index.html")
'../../01/b/index.html'
"""

from __future__ import annotations

import logging
import posixpath
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from sillage_pages._constants import SOURCE_PATH_KEY
from sillage_pages.config import TemplateConfig

if typ.TYPE_CHECKING:
    from sillage_pages.pipeline import Done, Pipeline, RecordSet

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def relative_path(child: str, parent: str) -> str:
    """Return ``child`` relative to the directory containing ``parent``."""
    return posixpath.relpath(child, posixpath.dirname(parent) or ".")


class LayoutsPlugin:
    """Render HTML records through their Jinja templates."""

    def __init__(self, config: TemplateConfig | None = None) -> None:
        """Initialize the Jinja environment from explicit settings.

        Parameters
        ----------
        config : TemplateConfig, optional
            Template directory, default template name, and autoescape flag.
            The package's ``templates`` directory is used when no directory is
            configured.
        """
        self.config = config or TemplateConfig()
        self.templates_dir = self.config.directory or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=self.config.autoescape,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["relative"] = relative_path

    def _template_name(self, metadata: dict[str, typ.Any]) -> str | None:
        """Return the template for a record, or ``None`` to leave it as is."""
        if "template" in metadata:
            return str(metadata["template"])
        if SOURCE_PATH_KEY in metadata:
            return self.config.default_template
        return None

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Replace each HTML record's contents with its rendered page."""
        for path in files.html_paths():
            record = files[path]
            template_name = self._template_name(record.metadata)
            if template_name is None:
                continue
            logger.debug("applying template %s to %s", template_name, path)
            template = self.env.get_template(template_name)
            context = {
                "site": {},
                "collections": {},
                **pipeline.metadata,
                **record.metadata,
                "contents": record.text,
                "path": path,
                "record": files.resolve,
            }
            html = template.render(**context)
            if not html.endswith("\n"):
                html += "\n"
            record.text = html
        done()


__all__ = ["DEFAULT_TEMPLATES_DIR", "LayoutsPlugin", "relative_path"]
