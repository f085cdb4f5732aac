"""Extract the teaser shown on index pages from each HTML post."""

from __future__ import annotations

import re
import typing as typ

from sillage_pages._constants import MORE_PATTERN

if typ.TYPE_CHECKING:
    from sillage_pages.pipeline import Done, Pipeline, RecordSet


class MorePlugin:
    """Store the HTML preceding a ``<!-- more -->`` comment as ``less`` metadata.

    The marker tolerates any whitespace inside the comment. Records without a
    marker only get ``less`` (their full contents) when ``always_add`` is set.
    """

    def __init__(
        self,
        pattern: str | re.Pattern[str] = MORE_PATTERN,
        key: str = "less",
        *,
        always_add: bool = False,
    ) -> None:
        self.pattern = re.compile(pattern)
        self.key = key
        self.always_add = always_add

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Attach the teaser to HTML records that carry the marker."""
        for path in files.html_paths():
            record = files[path]
            text = record.text
            match = self.pattern.search(text)
            if match is not None:
                record.metadata[self.key] = text[: match.start()].strip()
            elif self.always_add:
                record.metadata[self.key] = text.strip()
        done()


__all__ = ["MorePlugin"]
