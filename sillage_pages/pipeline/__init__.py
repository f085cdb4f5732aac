"""Record set and synchronous plugin runner for site builds."""

from .records import DocumentRecord, RecordSet, normalize_collection
from .runner import (
    BuildError,
    Done,
    FrontMatterError,
    Pipeline,
    Plugin,
    parse_front_matter,
)

__all__ = [
    "BuildError",
    "DocumentRecord",
    "Done",
    "FrontMatterError",
    "Pipeline",
    "Plugin",
    "RecordSet",
    "normalize_collection",
    "parse_front_matter",
]
