"""Publish sorted collection listings built from front matter membership."""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

from sillage_pages.dates import parse_timestamp

if typ.TYPE_CHECKING:
    from sillage_pages.config import CollectionConfig
    from sillage_pages.pipeline import DocumentRecord, Done, Pipeline, RecordSet

logger = logging.getLogger(__name__)

_EPOCH = dt.datetime.min.replace(tzinfo=dt.UTC)


def _sort_key(record: DocumentRecord, field: str) -> tuple[int, typ.Any]:
    """Return a key that orders missing values first, dates chronologically."""
    value = record.metadata.get(field)
    if field == "date":
        parsed = parse_timestamp(value)
        return (0, _EPOCH) if parsed is None else (1, parsed)
    if value is None:
        return (0, "")
    return (1, str(value))


class CollectionsPlugin:
    """Normalize ``collection`` metadata and publish per-collection listings.

    Every record's ``collection`` value becomes a list of names. For each
    configured collection, ``pipeline.metadata["collections"][name]`` receives
    the member paths sorted by the configured field.
    """

    def __init__(self, collections: typ.Mapping[str, CollectionConfig]) -> None:
        self.collections = dict(collections)

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Build the collection listings."""
        for record in files.values():
            if "collection" in record.metadata:
                record.metadata["collection"] = record.collections

        listings: dict[str, list[str]] = {}
        for name, rule in self.collections.items():
            members = [record for record in files.values() if name in record.collections]
            members.sort(key=lambda record: _sort_key(record, rule.sort_by))
            if rule.reverse:
                members.reverse()
            listings[name] = [record.path for record in members]
            logger.debug("collection %s: %d record(s)", name, len(members))
        pipeline.metadata["collections"] = listings
        done()


__all__ = ["CollectionsPlugin"]
