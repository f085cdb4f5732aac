"""Tests for the ``sillage build`` command."""

from __future__ import annotations

import typing as typ

import pytest

from sillage_pages.cli import build
from sillage_pages.pipeline import BuildError

if typ.TYPE_CHECKING:
    from pathlib import Path


def _site(tmp_path: Path, post: str) -> Path:
    content = tmp_path / "content"
    content.mkdir()
    (content / "post.md").write_text(post, encoding="utf-8")
    config_path = tmp_path / "site.yaml"
    config_path.write_text("source: content\ndestination: public\n", encoding="utf-8")
    return config_path


def test_build_prints_written_paths(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Each written file is reported on stdout."""
    config_path = _site(tmp_path, "---\ntitle: Hello\n---\n# Hello\n\nWorld.\n")
    build(config=config_path)
    out = capsys.readouterr().out
    assert "wrote " in out
    assert out.strip().endswith("post.html"), f"unexpected output {out!r}"
    html = (tmp_path / "public" / "post.html").read_text(encoding="utf-8")
    assert "<section>" in html


def test_destination_override(tmp_path: Path) -> None:
    """``--destination`` replaces the configured output directory."""
    config_path = _site(tmp_path, "Plain text.\n")
    target = tmp_path / "elsewhere"
    build(config=config_path, destination=target)
    assert (target / "post.html").exists()
    assert not (tmp_path / "public").exists()


def test_template_errors_abort_the_build(tmp_path: Path) -> None:
    """A post naming a missing template fails the whole build."""
    config_path = _site(tmp_path, "---\ntemplate: missing.jinja\n---\nText.\n")
    with pytest.raises(BuildError, match="LayoutsPlugin failed"):
        build(config=config_path)
    assert not (tmp_path / "public").exists()
