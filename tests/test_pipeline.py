"""Unit tests for the synchronous plugin runner.

These tests exercise :class:`sillage_pages.pipeline.Pipeline` with small
in-test plugins: reading a source tree with front matter, running plugins in
order, aborting the build on raised or reported errors, and writing output.

Usage
-----
Run ``pytest tests/test_pipeline.py -v``; everything happens under pytest's
``tmp_path``.
"""

from __future__ import annotations

import typing as typ

import pytest

from sillage_pages.pipeline import BuildError, DocumentRecord, Pipeline, RecordSet

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small source tree with a post, an image, and a nested page."""
    source = tmp_path / "src"
    (source / "2015").mkdir(parents=True)
    (source / "2015" / "post.md").write_text(
        "---\ntitle: Voyage\ncollection: stories\n---\nBody.\n", encoding="utf-8"
    )
    (source / "about.html").write_text("<p>About</p>", encoding="utf-8")
    (source / "photo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff")
    return source


def test_read_loads_front_matter_and_binary_files(
    source_tree: Path, tmp_path: Path
) -> None:
    """Text files lose their front matter; binary files keep raw bytes."""
    files = Pipeline(source_tree, tmp_path / "out").read()
    assert list(files) == ["2015/post.md", "about.html", "photo.png"]
    post = files["2015/post.md"]
    assert post.metadata == {"title": "Voyage", "collection": "stories"}
    assert post.text == "Body.\n"
    assert files["about.html"].metadata == {}
    assert files["photo.png"].contents == b"\x89PNG\r\n\x1a\n\xff"


def test_read_requires_source_directory(tmp_path: Path) -> None:
    """A missing source directory is reported before any plugin runs."""
    with pytest.raises(FileNotFoundError, match="not found"):
        Pipeline(tmp_path / "missing", tmp_path / "out").read()


def test_plugins_run_in_registration_order(tmp_path: Path) -> None:
    """Plugins see the record set one after another."""
    seen: list[str] = []

    def first(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        seen.append("first")
        files["a.html"].text += "1"
        done()

    def second(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        seen.append("second")
        files["a.html"].text += "2"
        done()

    files = RecordSet([DocumentRecord("a.html", b"")])
    Pipeline(tmp_path, tmp_path / "out").use(first).use(second).run(files)
    assert seen == ["first", "second"]
    assert files["a.html"].text == "12"


def test_raised_error_aborts_build(tmp_path: Path, mocker: MockerFixture) -> None:
    """An exception inside a plugin becomes a BuildError and stops the chain."""

    def broken(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        msg = "bad tree"
        raise ValueError(msg)

    later = mocker.Mock()
    pipeline = Pipeline(tmp_path, tmp_path / "out").use(broken).use(later)
    with pytest.raises(BuildError, match="broken failed: bad tree") as excinfo:
        pipeline.run(RecordSet())
    assert isinstance(excinfo.value.__cause__, ValueError)
    later.assert_not_called()


def test_reported_error_aborts_build(tmp_path: Path) -> None:
    """Passing an error to ``done`` aborts the build with that cause."""
    cause = RuntimeError("nope")

    def reporter(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        done(cause)

    with pytest.raises(BuildError) as excinfo:
        Pipeline(tmp_path, tmp_path / "out").use(reporter).run(RecordSet())
    assert excinfo.value.__cause__ is cause


def test_missing_completion_signal_is_an_error(tmp_path: Path) -> None:
    """A plugin must call ``done`` before returning."""

    def silent(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        return None

    with pytest.raises(BuildError, match="without signalling completion"):
        Pipeline(tmp_path, tmp_path / "out").use(silent).run(RecordSet())


def test_double_completion_signal_is_an_error(tmp_path: Path) -> None:
    """Calling ``done`` twice is rejected."""

    def chatty(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        done()
        done()

    with pytest.raises(BuildError, match="more than once"):
        Pipeline(tmp_path, tmp_path / "out").use(chatty).run(RecordSet())


def test_failed_build_writes_nothing(source_tree: Path, tmp_path: Path) -> None:
    """No output is produced when a plugin fails."""
    destination = tmp_path / "out"

    def broken(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        done(ValueError("stop"))

    with pytest.raises(BuildError):
        Pipeline(source_tree, destination).use(broken).build()
    assert not destination.exists()


def test_build_writes_records_and_cleans_destination(
    source_tree: Path, tmp_path: Path
) -> None:
    """The destination is replaced by the transformed record set."""
    destination = tmp_path / "out"
    destination.mkdir()
    (destination / "stale.html").write_text("old", encoding="utf-8")

    def drop_markdown(
        files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]
    ) -> None:
        del files["2015/post.md"]
        done()

    written = Pipeline(source_tree, destination).use(drop_markdown).build()
    assert written == [destination / "about.html", destination / "photo.png"]
    assert not (destination / "stale.html").exists()
    assert (destination / "about.html").read_text(encoding="utf-8") == "<p>About</p>"


def test_plugins_share_pipeline_metadata(tmp_path: Path) -> None:
    """Global metadata passed at construction is visible to plugins."""
    captured: dict[str, typ.Any] = {}

    def capture(files: RecordSet, pipeline: Pipeline, done: typ.Callable[..., None]) -> None:
        captured.update(pipeline.metadata)
        done()

    pipeline = Pipeline(tmp_path, tmp_path / "out", metadata={"site": {"title": "T"}})
    pipeline.use(capture).run(RecordSet())
    assert captured == {"site": {"title": "T"}}
