"""Render Markdown posts into HTML fragments with highlighted code blocks."""

from __future__ import annotations

import logging
import posixpath
import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from sillage_pages._constants import MARKDOWN_SUFFIXES, SOURCE_PATH_KEY
from sillage_pages.config import MarkdownConfig

if typ.TYPE_CHECKING:
    from sillage_pages.pipeline import Done, Pipeline, RecordSet

logger = logging.getLogger(__name__)

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')
QUOTE_KEYS = (
    "left-double-quote",
    "right-double-quote",
    "left-single-quote",
    "right-single-quote",
)


class MarkdownRenderer:
    """Convert Markdown to HTML using the blog's extension set."""

    def __init__(self, config: MarkdownConfig | None = None) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        config : MarkdownConfig, optional
            Pygments style and smart-quote substitutions. Defaults to
            :class:`MarkdownConfig` defaults (French guillemets).
        """
        self.config = config or MarkdownConfig()
        self._formatter = HtmlFormatter(
            style=self.config.pygments_style, cssclass="codehilite"
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> str:
        """Render ``text`` into an HTML fragment."""
        if not text.strip():
            return ""
        md = Markdown(
            extensions=[
                "fenced_code",
                "codehilite",
                "tables",
                "sane_lists",
                "toc",
                "admonition",
                "smarty",
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.config.pygments_style,
                },
                "smarty": {
                    "substitutions": dict(zip(QUOTE_KEYS, self.config.quotes)),
                },
            },
            output_format="html",
        )
        html = md.convert(text)
        return self._annotate_codehilite(html, text)

    @staticmethod
    def _annotate_codehilite(html: str, source_markdown: str) -> str:
        """Attach ``data-language`` to each highlighted block, in source order."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


def html_path(path: str) -> str:
    """Return ``path`` with its Markdown suffix replaced by ``.html``."""
    root, _ext = posixpath.splitext(path)
    return f"{root}.html"


class MarkdownPlugin:
    """Render Markdown records and rename them to ``.html``.

    Each converted record keeps its source path under ``sourcePath``; the
    layouts plugin uses it to apply the default template.
    """

    def __init__(self, config: MarkdownConfig | None = None) -> None:
        self.renderer = MarkdownRenderer(config)

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Convert every Markdown record in place."""
        sources = [path for path in files if path.lower().endswith(MARKDOWN_SUFFIXES)]
        for path in sources:
            logger.debug("rendering markdown: %s", path)
            record = files.rename(path, html_path(path))
            record.metadata.setdefault(SOURCE_PATH_KEY, path)
            record.text = self.renderer.render(record.text)
        pipeline.metadata["pygments_css"] = self.renderer.stylesheet
        done()


__all__ = ["CODE_BLOCK_PATTERN", "MarkdownPlugin", "MarkdownRenderer", "html_path"]
