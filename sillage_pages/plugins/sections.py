r"""Wrap heading-delimited HTML content in ``<section>`` elements.

Rendered Markdown is a flat run of siblings: headings, paragraphs, lists and
code blocks. :func:`build_sections` partitions that run into HTML5 sections
so every heading starts a ``<section>`` holding itself and the content that
follows it.

Nesting is driven by the number of open sections, not by the previous
heading's rank. A heading ascends out of open sections only while its level
is at most the current section depth, so under ``<h2>`` (depth 1) a second
``<h2>`` opens a section inside the first one.

Two options shape the result:

``level``
    Only headings whose level is at most ``level`` open sections. Deeper
    headings are ordinary content inside the open section.
``nested``
    When true, a deeper heading opens a section inside the current one. When
    false, every qualifying heading closes all open sections first, so the
    sections are siblings.

Only top-level nodes are inspected, which makes the transform idempotent:
after one pass every qualifying heading sits inside a section.

Examples
--------
>>> from sillage_pages.plugins.sections import build_sections
>>> build_sections("<h1>A</h1><p>a</p><h2>B</h2><p>b</p>")
'<section><h1>A</h1><p>a</p><section><h2>B</h2><p>b</p></section></section>'
>>> build_sections("<h1>A</h1><p>a</p><h2>B</h2><p>b</p>", nested=False)
'<section><h1>A</h1><p>a</p></section><section><h2>B</h2><p>b</p></section>'
>>> build_sections("<p>no headings</p>")
'<p>no headings</p>'
"""

from __future__ import annotations

import logging
import re
import typing as typ

from bs4 import BeautifulSoup, Tag

from sillage_pages.config import SectionsConfig

if typ.TYPE_CHECKING:
    from bs4.element import PageElement

    from sillage_pages.pipeline import Done, Pipeline, RecordSet

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"h([1-6])", re.IGNORECASE)


def heading_level(node: PageElement) -> int | None:
    """Return the level of a heading element, or None for any other node."""
    if not isinstance(node, Tag):
        return None
    match = HEADING_PATTERN.fullmatch(node.name)
    return int(match.group(1)) if match else None


def build_sections(html: str, *, level: int | None = None, nested: bool = True) -> str:
    """Return ``html`` with its top-level content partitioned into sections.

    Parameters
    ----------
    html : str
        HTML fragment, or a full document whose ``<body>`` children are used.
    level : int, optional
        Deepest heading level that opens a section. ``None`` (default) lets
        every heading level open one.
    nested : bool, optional
        Nest sections by heading depth (default) or keep them flat.

    Returns
    -------
    str
        Serialized HTML of a freshly built tree. Input without qualifying
        headings comes back with its nodes unwrapped.
    """
    source = BeautifulSoup(html, "html.parser")
    root = source.body or source
    output = BeautifulSoup("", "html.parser")

    # stack[-1] is the insertion target; len(stack) - 1 is the current depth.
    stack: list[Tag] = [output]
    for node in list(root.contents):
        node.extract()
        node_level = heading_level(node)
        if node_level is not None and (level is None or node_level <= level):
            while len(stack) > 1 and (not nested or node_level <= len(stack) - 1):
                stack.pop()
            section = output.new_tag("section")
            stack[-1].append(section)
            stack.append(section)
        stack[-1].append(node)
    return output.decode()


class SectionsPlugin:
    """Apply :func:`build_sections` to every HTML record."""

    def __init__(self, config: SectionsConfig | None = None) -> None:
        self.config = config or SectionsConfig()

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Rewrite the contents of each HTML record in place."""
        for path in files.html_paths():
            logger.debug("generating HTML5 sections for file: %s", path)
            record = files[path]
            record.text = build_sections(
                record.text, level=self.config.level, nested=self.config.nested
            )
        done()


__all__ = ["HEADING_PATTERN", "SectionsPlugin", "build_sections", "heading_level"]
