"""
Export Package

- frames: Polars DataFrames for manifests and statements, page subtotals
- writers: CSV / JSON files
"""

from .frames import (
    MANIFEST_COLUMNS,
    STATEMENT_COLUMNS,
    TOTALS_LABEL,
    manifest_frame,
    statement_frame,
    tier_frame,
    amount_logic,
    heavy_detail_text,
    page_subtotals,
)
from .writers import (
    write_manifest_csv,
    write_manifest_json,
    write_statement_csv,
    write_statement_json,
    statement_to_record,
)

__all__ = [
    # Frames
    "MANIFEST_COLUMNS",
    "STATEMENT_COLUMNS",
    "TOTALS_LABEL",
    "manifest_frame",
    "statement_frame",
    "tier_frame",
    "amount_logic",
    "heavy_detail_text",
    "page_subtotals",
    # Writers
    "write_manifest_csv",
    "write_manifest_json",
    "write_statement_csv",
    "write_statement_json",
    "statement_to_record",
]
