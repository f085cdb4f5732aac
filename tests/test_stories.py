"""Unit tests for story grouping and navigation links.

The fixtures build small record sets of same-titled posts and run
:func:`sillage_pages.plugins.stories.link_stories` over them. Assertions cover
the ``story`` listing order, the ``storyDate`` of a story (its most recent
installment), navigation computed once per story, and the handling of records
outside the ``stories`` collection.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from sillage_pages.pipeline import DocumentRecord, RecordSet
from sillage_pages.plugins.stories import StoriesPlugin, link_stories

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

D1 = dt.date(2015, 6, 1)
D2 = dt.date(2015, 6, 8)
D3 = dt.date(2015, 6, 15)


def _post(
    path: str,
    date: object,
    *,
    title: str = "Voyage",
    collection: object = ("stories",),
) -> DocumentRecord:
    """Return a record with the metadata the story linker reads."""
    return DocumentRecord(
        path,
        b"<p>body</p>",
        {"title": title, "date": date, "collection": list(collection)},
    )


@pytest.fixture
def three_part_story() -> RecordSet:
    """Return three installments of one story, stored oldest first."""
    return RecordSet(
        [_post("part-1.html", D1), _post("part-2.html", D2), _post("part-3.html", D3)]
    )


def test_story_lists_other_installments_most_recent_first(
    three_part_story: RecordSet,
) -> None:
    """Each installment lists the other two, newest first."""
    link_stories(three_part_story)
    expected = {
        "part-1.html": ["part-3.html", "part-2.html"],
        "part-2.html": ["part-3.html", "part-1.html"],
        "part-3.html": ["part-2.html", "part-1.html"],
    }
    for path, story in expected.items():
        actual = three_part_story[path].metadata["story"]
        assert actual == story, f"unexpected story for {path}: {actual!r}"


def test_story_date_is_most_recent_installment(three_part_story: RecordSet) -> None:
    """Every installment reports the date of the newest installment."""
    link_stories(three_part_story)
    for record in three_part_story.values():
        assert record.metadata["storyDate"] == D3, (
            f"expected storyDate {D3} for {record.path}, "
            f"got {record.metadata['storyDate']!r}"
        )


def test_navigation_runs_from_newest_to_oldest(three_part_story: RecordSet) -> None:
    """The newest installment is home; next walks back in time."""
    link_stories(three_part_story)
    newest = three_part_story["part-3.html"].metadata
    middle = three_part_story["part-2.html"].metadata
    oldest = three_part_story["part-1.html"].metadata

    assert "storyHome" not in newest, "the story home should not point at itself"
    assert "storyPrev" not in newest
    assert newest["storyNext"] == "part-2.html"
    assert middle["storyHome"] == "part-3.html"
    assert middle["storyPrev"] == "part-3.html"
    assert middle["storyNext"] == "part-1.html"
    assert oldest["storyHome"] == "part-3.html"
    assert oldest["storyPrev"] == "part-2.html"
    assert "storyNext" not in oldest


def test_navigation_does_not_depend_on_record_order() -> None:
    """Shuffling the record set yields the same links."""
    ordered = RecordSet([_post("a.html", D1), _post("b.html", D2), _post("c.html", D3)])
    shuffled = RecordSet([_post("b.html", D2), _post("c.html", D3), _post("a.html", D1)])
    link_stories(ordered)
    link_stories(shuffled)
    for path in ordered:
        assert ordered[path].metadata == shuffled[path].metadata, (
            f"metadata for {path} differs between orderings"
        )


def test_links_are_paths_resolvable_through_the_record_set(
    three_part_story: RecordSet,
) -> None:
    """Navigation values resolve back to the records they name."""
    link_stories(three_part_story)
    middle = three_part_story["part-2.html"]
    home = three_part_story.resolve(middle.metadata["storyHome"])
    assert home is three_part_story["part-3.html"]
    assert isinstance(middle.metadata["storyNext"], str)


def test_single_installment_story() -> None:
    """A lone story post gets an empty story, its own date, and no links."""
    files = RecordSet([_post("solo.html", D2)])
    link_stories(files)
    metadata = files["solo.html"].metadata
    assert metadata["story"] == []
    assert metadata["storyDate"] == D2
    for key in ("storyPrev", "storyNext", "storyHome"):
        assert key not in metadata, f"unexpected {key} on a single-post story"


def test_records_outside_stories_are_not_annotated() -> None:
    """Posts that never opt into stories are left untouched."""
    files = RecordSet(
        [
            _post("a.html", D1, collection=("posts",)),
            _post("b.html", D2, collection=("posts",)),
        ]
    )
    link_stories(files)
    for record in files.values():
        assert "story" not in record.metadata
        assert "storyNext" not in record.metadata


def test_same_titled_non_story_records_join_the_group() -> None:
    """Grouping is by title; only story members get the story listing."""
    files = RecordSet(
        [
            _post("story.html", D2),
            _post("page.html", D1, collection=()),
            _post("other.html", D3, title="Elsewhere"),
        ]
    )
    link_stories(files)
    assert files["story.html"].metadata["story"] == ["page.html"]
    assert "story" not in files["page.html"].metadata
    assert files["page.html"].metadata["storyHome"] == "story.html"
    assert files["other.html"].metadata["story"] == []


def test_collection_may_be_a_single_string() -> None:
    """A plain string ``collection`` value counts as membership."""
    record = DocumentRecord(
        "a.html", b"", {"title": "T", "date": D1, "collection": "stories"}
    )
    files = RecordSet([record, _post("b.html", D2, title="T")])
    link_stories(files)
    assert record.metadata["story"] == ["b.html"]


def test_undated_installments_sort_last() -> None:
    """Records without a usable date are treated as the oldest."""
    files = RecordSet(
        [_post("undated.html", None), _post("dated.html", D1), _post("odd.html", "?")]
    )
    link_stories(files)
    assert files["dated.html"].metadata["story"] == ["odd.html", "undated.html"]
    assert files["undated.html"].metadata["storyDate"] == D1


def test_mixed_date_types_compare() -> None:
    """Dates, datetimes and ISO strings are ordered together."""
    files = RecordSet(
        [
            _post("a.html", D1),
            _post("b.html", dt.datetime(2015, 6, 2, 9, 30)),
            _post("c.html", "2015-06-03T08:00:00Z"),
        ]
    )
    link_stories(files)
    assert files["a.html"].metadata["story"] == ["c.html", "b.html"]


def test_rerun_replaces_stale_links(three_part_story: RecordSet) -> None:
    """Links from an earlier run are dropped when the story shrinks."""
    link_stories(three_part_story)
    del three_part_story["part-3.html"]
    link_stories(three_part_story)
    newest = three_part_story["part-2.html"].metadata
    assert "storyHome" not in newest
    assert "storyPrev" not in newest
    assert three_part_story["part-1.html"].metadata["storyHome"] == "part-2.html"


def test_plugin_signals_completion(
    three_part_story: RecordSet, mocker: MockerFixture
) -> None:
    """The plugin links stories and reports success exactly once."""
    done = mocker.Mock()
    StoriesPlugin()(three_part_story, mocker.Mock(), done)
    done.assert_called_once_with()
    assert three_part_story["part-1.html"].metadata["storyHome"] == "part-3.html"


def test_missing_and_empty_titles_form_separate_groups() -> None:
    """Untitled records group together; an empty title is its own group."""
    files = RecordSet(
        [
            DocumentRecord("a.html", b"", {"collection": ["stories"]}),
            DocumentRecord("b.html", b"", {"title": "", "collection": ["stories"]}),
            DocumentRecord("c.html", b"", {"title": "", "date": D1}),
            DocumentRecord("site.css", b"body {}"),
        ]
    )
    link_stories(files)
    assert files["a.html"].metadata["story"] == ["site.css"]
    assert files["a.html"].metadata["storyNext"] == "site.css"
    assert files["site.css"].metadata["storyHome"] == "a.html"
    assert files["b.html"].metadata["story"] == ["c.html"], (
        "records with an empty title should only group with each other"
    )
    assert files["b.html"].metadata["storyHome"] == "c.html"
    assert "story" not in files["c.html"].metadata
