"""Drop records flagged as drafts before anything else renders them."""

from __future__ import annotations

import logging
import typing as typ

if typ.TYPE_CHECKING:
    from sillage_pages.pipeline import Done, Pipeline, RecordSet

logger = logging.getLogger(__name__)


class DraftsPlugin:
    """Remove every record whose ``draft`` metadata is truthy."""

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Delete draft records from ``files``."""
        drafts = [path for path, record in files.items() if record.metadata.get("draft")]
        for path in drafts:
            logger.debug("skipping draft: %s", path)
            del files[path]
        done()


__all__ = ["DraftsPlugin"]
