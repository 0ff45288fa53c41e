"""
Loaders Package

- intake: Records (JSON, extraction output, overrides) -> typed models
- imports: Batch import with duplicate detection, conflict resolution
- archive: Folder ZIP export / import
"""

from .intake import (
    RawLineItem,
    RawRateTable,
    RawManifest,
    RawOverride,
    OVERRIDE_KEYS,
    manifest_from_record,
    override_from_record,
    manifest_to_record,
    line_items_from_extraction,
    rate_table_from_record,
    rate_table_to_record,
)
from .imports import (
    ImportResult,
    CONFLICT_ACTIONS,
    import_records,
    find_conflict,
    resolve_conflict,
)
from .archive import export_folder_archive, import_folder_archive, safe_file_name

__all__ = [
    # Intake
    "RawLineItem",
    "RawRateTable",
    "RawManifest",
    "RawOverride",
    "OVERRIDE_KEYS",
    "manifest_from_record",
    "override_from_record",
    "manifest_to_record",
    "line_items_from_extraction",
    "rate_table_from_record",
    "rate_table_to_record",
    # Import
    "ImportResult",
    "CONFLICT_ACTIONS",
    "import_records",
    "find_conflict",
    "resolve_conflict",
    # Archive
    "export_folder_archive",
    "import_folder_archive",
    "safe_file_name",
]
