"""Plugins run by :class:`~sillage_pages.pipeline.Pipeline` during a build."""

from .collections import CollectionsPlugin
from .drafts import DraftsPlugin
from .imglinks import ImageLinksPlugin, link_images
from .layouts import LayoutsPlugin, relative_path
from .markdown_renderer import MarkdownPlugin, MarkdownRenderer
from .more import MorePlugin
from .sections import SectionsPlugin, build_sections
from .stories import StoriesPlugin, link_stories

__all__ = [
    "CollectionsPlugin",
    "DraftsPlugin",
    "ImageLinksPlugin",
    "LayoutsPlugin",
    "MarkdownPlugin",
    "MarkdownRenderer",
    "MorePlugin",
    "SectionsPlugin",
    "StoriesPlugin",
    "build_sections",
    "link_images",
    "link_stories",
    "relative_path",
]
