"""Synchronous plugin runner that turns a source tree into an output tree.

A :class:`Pipeline` reads every file below ``source`` into a
:class:`~sillage_pages.pipeline.records.RecordSet`, hands the whole set to each
registered plugin in turn, and finally writes the surviving records below
``destination``.

Plugins share one calling convention::

    def plugin(files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        ...  # mutate ``files`` in place
        done()

``done()`` signals success and ``done(error)`` failure. Any failure, whether
raised or reported, aborts the build with :class:`BuildError`; nothing is
written to disk in that case.

Examples
--------
>>> from pathlib import Path
>>> from sillage_pages.pipeline import Pipeline
>>> def shout(files, pipeline, done):
...     for record in files.values():
...         record.text = record.text.upper()
...     done()
>>> Pipeline(Path("src"), Path("build")).use(shout).build()  # doctest: +SKIP
[PosixPath('build/index.html')]
"""

from __future__ import annotations

import collections.abc as cabc
import io
import logging
import shutil
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .records import DocumentRecord, RecordSet

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"

Done = cabc.Callable[..., None]


class Plugin(typ.Protocol):
    """Callable accepted by :meth:`Pipeline.use`."""

    def __call__(self, files: RecordSet, pipeline: Pipeline, done: Done) -> None:
        """Transform ``files`` in place and report completion through ``done``."""


class BuildError(RuntimeError):
    """Raised when a plugin fails and the build is aborted."""


class FrontMatterError(ValueError):
    """Raised when a source file carries unreadable front matter."""


class Pipeline:
    """Read, transform, and write a tree of documents."""

    def __init__(
        self,
        source: Path,
        destination: Path,
        *,
        metadata: cabc.Mapping[str, typ.Any] | None = None,
        clean: bool = True,
    ) -> None:
        """Initialize the pipeline.

        Parameters
        ----------
        source : Path
            Directory holding the source documents and assets.
        destination : Path
            Directory receiving the rendered output.
        metadata : Mapping[str, Any], optional
            Global metadata shared with every plugin (site settings,
            collections). Copied into a fresh dict.
        clean : bool, optional
            Remove ``destination`` before writing. Defaults to ``True``.
        """
        self.source = source
        self.destination = destination
        self.metadata: dict[str, typ.Any] = dict(metadata or {})
        self.clean = clean
        self.plugins: list[Plugin] = []

    def use(self, plugin: Plugin) -> Pipeline:
        """Append ``plugin`` to the chain and return the pipeline."""
        self.plugins.append(plugin)
        return self

    def build(self) -> list[Path]:
        """Read the source tree, run every plugin, and write the output."""
        files = self.read()
        self.run(files)
        return self.write(files)

    def read(self) -> RecordSet:
        """Load every file below ``source`` into a new record set.

        Raises
        ------
        FileNotFoundError
            If ``source`` is not an existing directory.
        FrontMatterError
            If a file's front matter cannot be parsed into a mapping.
        """
        if not self.source.is_dir():
            msg = f"Source directory '{self.source}' not found."
            raise FileNotFoundError(msg)
        files = RecordSet()
        for file_path in sorted(self.source.rglob("*")):
            if not file_path.is_file():
                continue
            rel_path = file_path.relative_to(self.source).as_posix()
            files.add(_read_record(rel_path, file_path.read_bytes()))
        logger.debug("read %d files from %s", len(files), self.source)
        return files

    def run(self, files: RecordSet) -> RecordSet:
        """Run every plugin over ``files`` in registration order.

        Raises
        ------
        BuildError
            If a plugin raises, reports an error through ``done``, never
            calls ``done``, or calls it more than once.
        """
        for plugin in self.plugins:
            self._run_plugin(plugin, files)
        return files

    def write(self, files: RecordSet) -> list[Path]:
        """Write ``files`` below ``destination`` and return the written paths."""
        if self.clean and self.destination.exists():
            shutil.rmtree(self.destination)
        written: list[Path] = []
        for record in files.values():
            output_path = self.destination / record.path
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(record.contents)
            written.append(output_path)
        return sorted(written)

    def _run_plugin(self, plugin: Plugin, files: RecordSet) -> None:
        name = _plugin_name(plugin)
        outcome: list[Exception | None] = []

        def done(error: Exception | None = None) -> None:
            if outcome:
                msg = f"Plugin {name} signalled completion more than once."
                raise BuildError(msg)
            outcome.append(error)

        logger.debug("running plugin %s", name)
        try:
            plugin(files, self, done)
        except BuildError:
            raise
        except Exception as exc:
            msg = f"Plugin {name} failed: {exc}"
            raise BuildError(msg) from exc

        if not outcome:
            msg = f"Plugin {name} returned without signalling completion."
            raise BuildError(msg)
        error = outcome[0]
        if error is not None:
            msg = f"Plugin {name} failed: {error}"
            raise BuildError(msg) from error


def _plugin_name(plugin: object) -> str:
    """Return a readable name for log and error messages."""
    name = getattr(plugin, "__name__", None)
    return name or type(plugin).__name__


def _read_record(rel_path: str, raw: bytes) -> DocumentRecord:
    """Build a record, splitting YAML front matter from UTF-8 text files."""
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return DocumentRecord(rel_path, raw, {})
    metadata, body = parse_front_matter(text, origin=rel_path)
    if metadata is None:
        return DocumentRecord(rel_path, raw, {})
    return DocumentRecord(rel_path, body.encode("utf-8"), metadata)


def parse_front_matter(
    text: str, *, origin: str = "<string>"
) -> tuple[dict[str, typ.Any] | None, str]:
    """Split a leading ``---`` YAML block from ``text``.

    A leading UTF-8 byte-order mark is ignored.

    Parameters
    ----------
    text : str
        Full file contents.
    origin : str, optional
        Name used in error messages.

    Returns
    -------
    tuple[dict[str, Any] | None, str]
        The parsed metadata (``None`` when no front matter is present) and the
        remaining body.

    Raises
    ------
    FrontMatterError
        If the block is unterminated, not valid YAML, or not a mapping.
    """
    lines = text.lstrip("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONT_MATTER_DELIMITER:
        return None, text
    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == FRONT_MATTER_DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        msg = f"Unterminated front matter in '{origin}'."
        raise FrontMatterError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(io.StringIO(header))
    except YAMLError as exc:
        msg = f"Invalid front matter in '{origin}': {exc}"
        raise FrontMatterError(msg) from exc
    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        msg = f"Front matter in '{origin}' must be a mapping."
        raise FrontMatterError(msg)
    return dict(loaded), body


__all__ = [
    "BuildError",
    "Done",
    "FrontMatterError",
    "Pipeline",
    "Plugin",
    "parse_front_matter",
]
