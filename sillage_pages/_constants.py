"""Common literal values used across sillage_pages.

These constants keep metadata keys and collection names centralized so
plugins, templates, and tests can import the same values without drifting.
Intended for internal use within the sillage_pages package.

Examples
--------
>>> from sillage_pages import _constants
>>> _constants.STORIES_COLLECTION
'stories'
>>> "storyHome" in _constants.STORY_NAVIGATION_KEYS
True
"""

STORIES_COLLECTION = "stories"
STORY_NAVIGATION_KEYS = ("storyPrev", "storyNext", "storyHome")
MORE_PATTERN = r"<!--\s*more\s*-->"
MARKDOWN_SUFFIXES = (".md", ".markdown")
SOURCE_PATH_KEY = "sourcePath"
