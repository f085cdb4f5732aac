"""Group same-titled posts into stories and link them for navigation.

A story is a run of posts published under one title, each an installment of a
single narrative. Posts opt in through the ``stories`` collection. For every
such post, :func:`link_stories` gathers the other records sharing its exact
title and records:

``story``
    Paths of the other installments, most recent first.
``storyDate``
    Date of the most recent installment in the whole story.

Navigation is computed once per story over its installments ordered most
recent first. The most recent installment is the story home; every other
installment gets ``storyHome`` pointing at it. ``storyNext`` walks towards
older installments and ``storyPrev`` back towards newer ones.

All relations are stored as record paths. Templates resolve them through
:meth:`~sillage_pages.pipeline.RecordSet.resolve`.

Examples
--------
>>> import datetime as dt
>>> from sillage_pages.pipeline import DocumentRecord, RecordSet
>>> from sillage_pages.plugins.stories import link_stories
>>> files = RecordSet(
...     DocumentRecord(
...         f"part-{day}.html",
...         metadata={
...             "title": "Voyage",
...             "date": dt.date(2015, 1, day),
...             "collection": ["stories"],
...         },
...     )
...     for day in (1, 2)
... )
>>> link_stories(files)
>>> files["part-1.html"].metadata["storyHome"]
'part-2.html'
>>> files["part-2.html"].metadata["storyNext"]
'part-1.html'
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

from sillage_pages._constants import STORIES_COLLECTION, STORY_NAVIGATION_KEYS
from sillage_pages.dates import parse_timestamp

if typ.TYPE_CHECKING:
    from sillage_pages.pipeline import DocumentRecord, Done, Pipeline, RecordSet

logger = logging.getLogger(__name__)

_UNDATED = dt.datetime.min.replace(tzinfo=dt.UTC)


def _recency_key(record: DocumentRecord) -> dt.datetime:
    """Sort key placing undated records after every dated one."""
    return parse_timestamp(record.date) or _UNDATED


def _title_key(record: DocumentRecord) -> str | None:
    """Return the grouping key; a missing title stays distinct from ``""``."""
    value = record.metadata.get("title")
    return None if value is None else str(value)


def _most_recent_first(records: list[DocumentRecord]) -> list[DocumentRecord]:
    """Return ``records`` ordered by descending date; ties keep path order."""
    by_path = sorted(records, key=lambda record: record.path)
    return sorted(by_path, key=_recency_key, reverse=True)


def link_stories(files: RecordSet, *, collection: str = STORIES_COLLECTION) -> None:
    """Annotate story members in ``files`` with grouping and navigation data.

    Parameters
    ----------
    files : RecordSet
        Complete record set; mutated in place.
    collection : str, optional
        Collection name that marks a record as part of a story. Defaults to
        ``"stories"``.

    Notes
    -----
    Groups contain every record with the same title, whether or not it is in
    ``collection``. Only records in ``collection`` receive ``story`` and
    ``storyDate``, but all group members take part in navigation. Records
    without a ``title`` group together, apart from records whose title is
    the empty string.
    """
    by_title: dict[str | None, list[DocumentRecord]] = {}
    for record in files.values():
        by_title.setdefault(_title_key(record), []).append(record)

    linked_titles: set[str | None] = set()
    for record in files.values():
        title = _title_key(record)
        if collection not in record.collections or title in linked_titles:
            continue
        linked_titles.add(title)
        members = _most_recent_first(by_title[title])
        logger.debug("linking story %r with %d installment(s)", title, len(members))
        _annotate_members(members, collection)
        _link_navigation(members)


def _annotate_members(members: list[DocumentRecord], collection: str) -> None:
    """Set ``story`` and ``storyDate`` on each eligible member."""
    story_date = members[0].date
    for member in members:
        if collection not in member.collections:
            continue
        member.metadata["story"] = [
            other.path for other in members if other is not member
        ]
        member.metadata["storyDate"] = story_date


def _link_navigation(members: list[DocumentRecord]) -> None:
    """Link members into a list ordered most recent first, homed at the head."""
    for member in members:
        for key in STORY_NAVIGATION_KEYS:
            member.metadata.pop(key, None)
    if len(members) < 2:
        return
    home = members[0]
    for index, member in enumerate(members):
        if member is not home:
            member.metadata["storyHome"] = home.path
        if index > 0:
            member.metadata["storyPrev"] = members[index - 1].path
        if index + 1 < len(members):
            member.metadata["storyNext"] = members[index + 1].path


class StoriesPlugin:
    """Run :func:`link_stories` over the whole record set."""

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Annotate story members in place."""
        link_stories(files)
        done()


__all__ = ["StoriesPlugin", "link_stories"]
