"""
JSON Export / Import

Export writes the full entry list as a pretty-printed JSON array in
the same layout the store persists. Import reads such a file back.
Exporting never modifies the stored entries.
"""

from datetime import date
from typing import Iterable, Optional

from pydantic import ValidationError

from finance_tracker.models.entry import Entry
from finance_tracker.store import parse_entries, serialize_entries


DEFAULT_EXPORT_PREFIX = "gastos-ingresos"


class ImportFormatError(Exception):
    """The import file is not a JSON array of entries."""
    pass


def export_entries(entries: Iterable[Entry]) -> str:
    """Pretty-printed JSON array (indent 2)."""
    return serialize_entries(entries, indent=2)


def export_filename(
    on: Optional[date] = None,
    prefix: str = DEFAULT_EXPORT_PREFIX,
) -> str:
    """e.g. 'gastos-ingresos-2024-01-31.json'."""
    return f"{prefix}-{(on or date.today()).isoformat()}.json"


def import_entries(text: str) -> list[Entry]:
    """
    Parse an exported file.

    Raises:
        ImportFormatError: If the text is not a valid export
    """
    try:
        return parse_entries(text)
    except ValidationError as e:
        raise ImportFormatError(
            f"File contains {e.error_count()} invalid entry field(s)"
        ) from e
    except ValueError as e:
        raise ImportFormatError(f"Not a valid export file: {e}") from e
