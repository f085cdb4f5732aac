"""In-memory document records and the record set that owns them.

Every file read from the source tree becomes a :class:`DocumentRecord`. The
:class:`RecordSet` is the single owner of those records for the duration of a
build: plugins look records up by path, and relations between records (story
navigation, collections) are stored as paths and resolved through
:meth:`RecordSet.resolve` rather than as direct object references.

Examples
--------
>>> from sillage_pages.pipeline.records import DocumentRecord, RecordSet
>>> files = RecordSet()
>>> files.add(DocumentRecord("a.html", b"<p>A</p>", {"title": "A"}))
>>> files.resolve("a.html").title
'A'
>>> files.resolve("missing.html") is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

HTML_PATH_PATTERN = re.compile(r"\.html?$", re.IGNORECASE)


@dc.dataclass(slots=True, eq=False)
class DocumentRecord:
    """One file travelling through the pipeline.

    Attributes
    ----------
    path : str
        Output-relative POSIX path; unique within a :class:`RecordSet`.
    contents : bytes
        Raw file body. HTML records hold UTF-8 encoded markup.
    metadata : dict[str, Any]
        Front matter plus anything plugins attach (``story``, ``less``, ...).
    """

    path: str
    contents: bytes = b""
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)

    @property
    def text(self) -> str:
        """Return ``contents`` decoded as UTF-8."""
        return self.contents.decode("utf-8")

    @text.setter
    def text(self, value: str) -> None:
        self.contents = value.encode("utf-8")

    @property
    def title(self) -> str:
        """Return the record title, or an empty string when unset."""
        value = self.metadata.get("title")
        return "" if value is None else str(value)

    @property
    def date(self) -> typ.Any:
        """Return the raw ``date`` metadata value."""
        return self.metadata.get("date")

    @property
    def collections(self) -> list[str]:
        """Return the collection names this record belongs to."""
        return normalize_collection(self.metadata.get("collection"))

    def is_html(self) -> bool:
        """Return True when the record path has an ``.htm``/``.html`` suffix."""
        return bool(HTML_PATH_PATTERN.search(self.path))


def normalize_collection(value: object) -> list[str]:
    """Normalize a ``collection`` metadata value into a list of names."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, cabc.Iterable):
        return [str(item) for item in value if str(item).strip()]
    return [str(value)]


class RecordSet(cabc.MutableMapping[str, DocumentRecord]):
    """Ordered mapping of output path to :class:`DocumentRecord`."""

    def __init__(self, records: cabc.Iterable[DocumentRecord] = ()) -> None:
        self._records: dict[str, DocumentRecord] = {}
        for record in records:
            self.add(record)

    def __getitem__(self, path: str) -> DocumentRecord:
        return self._records[path]

    def __setitem__(self, path: str, record: DocumentRecord) -> None:
        if record.path != path:
            msg = f"Record path {record.path!r} does not match key {path!r}."
            raise ValueError(msg)
        self._records[path] = record

    def __delitem__(self, path: str) -> None:
        del self._records[path]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"RecordSet({list(self._records)!r})"

    def add(self, record: DocumentRecord) -> None:
        """Insert ``record`` under its own path, rejecting duplicates."""
        if record.path in self._records:
            msg = f"Duplicate record path {record.path!r}."
            raise ValueError(msg)
        self._records[record.path] = record

    def rename(self, old: str, new: str) -> DocumentRecord:
        """Move the record stored at ``old`` to ``new`` and return it.

        Raises
        ------
        KeyError
            If no record exists at ``old``.
        ValueError
            If another record already occupies ``new``.
        """
        if old == new:
            return self._records[old]
        if new in self._records:
            msg = f"Cannot rename {old!r}: {new!r} already exists."
            raise ValueError(msg)
        record = self._records.pop(old)
        record.path = new
        self._records[new] = record
        return record

    def resolve(self, path: str | None) -> DocumentRecord | None:
        """Return the record stored at ``path``, or None for dangling links."""
        if not path:
            return None
        return self._records.get(path)

    def html_paths(self) -> list[str]:
        """Return the paths of every HTML record, in insertion order."""
        return [path for path, record in self._records.items() if record.is_html()]


__all__ = [
    "HTML_PATH_PATTERN",
    "DocumentRecord",
    "RecordSet",
    "normalize_collection",
]
