"""
Pipeline Package

Aggregation logic (storage-agnostic):
- summarize: Per-manifest counts, weights and slab totals
- consolidate: Multi-manifest statement with overrides and grand totals
"""

from .summarize import summarize, summarize_manifest
from .consolidate import (
    build_statement,
    build_line,
    compute_totals,
    heavy_detail_warnings,
    parse_heavy_detail,
    parse_manifest_date,
    resolve,
)

__all__ = [
    "summarize",
    "summarize_manifest",
    "build_statement",
    "build_line",
    "compute_totals",
    "heavy_detail_warnings",
    "parse_heavy_detail",
    "parse_manifest_date",
    "resolve",
]
