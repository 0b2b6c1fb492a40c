"""Export / import package."""

from finance_tracker.export.json_export import (
    DEFAULT_EXPORT_PREFIX,
    ImportFormatError,
    export_entries,
    export_filename,
    import_entries,
)

__all__ = [
    "DEFAULT_EXPORT_PREFIX",
    "ImportFormatError",
    "export_entries",
    "export_filename",
    "import_entries",
]
