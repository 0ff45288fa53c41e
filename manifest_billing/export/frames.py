"""
Export Frames

Polars DataFrames for manifest and statement exports. Writers and the
dashboard both read from these, so a column only has to be defined once.
"""

import polars as pl

from ..formatting import format_number
from ..models import ConsolidatedStatement, ConsolidatedStatementLine, Manifest
from ..data.reference.statement import HEAVY_DETAIL_SEPARATOR, ROWS_PER_PAGE


# =============================================================================
# COLUMNS
# =============================================================================

MANIFEST_COLUMNS = [
    "Sl.No", "Serial/AWB", "Description", "Type", "Weight(kg)", "Slab Breakdown", "Amount",
]

STATEMENT_COLUMNS = [
    "#", "Date", "Manifest No", "Small Parcels (p)", "Big Parcels (P)", "Docs (D)",
    "p weight", "P detail", "Total Wt", "Amount Logic", "Net Amount",
]

TOTALS_LABEL = "TOTALS"

_STATEMENT_SCHEMA = {
    "#": pl.Utf8,
    "Date": pl.Utf8,
    "Manifest No": pl.Utf8,
    "Small Parcels (p)": pl.Int64,
    "Big Parcels (P)": pl.Int64,
    "Docs (D)": pl.Int64,
    "p weight": pl.Float64,
    "P detail": pl.Utf8,
    "Total Wt": pl.Float64,
    "Amount Logic": pl.Utf8,
    "Net Amount": pl.Float64,
}


# =============================================================================
# MANIFEST
# =============================================================================

def manifest_frame(manifest: Manifest) -> pl.DataFrame:
    """One row per line item, amounts and breakdowns as priced."""
    return pl.DataFrame(
        {
            "Sl.No": [item.sequence_number for item in manifest.items],
            "Serial/AWB": [item.reference_code for item in manifest.items],
            "Description": [item.description for item in manifest.items],
            "Type": [item.item_type.value for item in manifest.items],
            "Weight(kg)": [float(item.weight) for item in manifest.items],
            "Slab Breakdown": [item.breakdown for item in manifest.items],
            "Amount": [float(item.amount) for item in manifest.items],
        },
        schema={
            "Sl.No": pl.Int64,
            "Serial/AWB": pl.Utf8,
            "Description": pl.Utf8,
            "Type": pl.Utf8,
            "Weight(kg)": pl.Float64,
            "Slab Breakdown": pl.Utf8,
            "Amount": pl.Float64,
        },
    )


# =============================================================================
# STATEMENT
# =============================================================================

def heavy_detail_text(line: ConsolidatedStatementLine) -> str:
    """
    "20+30=50" for a line with heavy parcels, "0" otherwise.
    """
    if not line.heavy_weights:
        return "0"
    joined = HEAVY_DETAIL_SEPARATOR.join(format_number(w) for w in line.heavy_weights)
    return f"{joined}={format_number(line.heavy_total)}"


def amount_logic(line: ConsolidatedStatementLine) -> str:
    """
    How a line's amount was reached.
    Example: "S1:(18kg@3=54) S2:(45kg@2=90) S3:(0kg@1=0) Doc:(1*5=5)"
    """
    r = line.rates
    f = format_number
    return (
        f"S1:({f(line.tier1_weight)}kg@{f(r.slab1_rate)}={f(line.tier1_total)}) "
        f"S2:({f(line.tier2_weight)}kg@{f(r.slab2_rate)}={f(line.tier2_total)}) "
        f"S3:({f(line.tier3_weight)}kg@{f(r.slab3_rate)}={f(line.tier3_total)}) "
        f"Doc:({line.document_count}*{f(r.document_rate)}={f(line.document_total)})"
    )


def statement_frame(statement: ConsolidatedStatement, include_totals: bool = True) -> pl.DataFrame:
    """
    One row per statement line, plus a TOTALS row.

    Args:
        statement: Built consolidated statement
        include_totals: Append the TOTALS row (default True)
    """
    rows = [
        {
            "#": str(i + 1),
            "Date": line.date,
            "Manifest No": line.manifest_number,
            "Small Parcels (p)": int(line.light_count),
            "Big Parcels (P)": int(line.heavy_count),
            "Docs (D)": int(line.document_count),
            "p weight": float(line.light_weight),
            "P detail": heavy_detail_text(line),
            "Total Wt": float(line.total_weight),
            "Amount Logic": amount_logic(line),
            "Net Amount": float(line.line_total),
        }
        for i, line in enumerate(statement.lines)
    ]

    if include_totals:
        t = statement.totals
        rows.append({
            "#": TOTALS_LABEL,
            "Date": "",
            "Manifest No": "",
            "Small Parcels (p)": int(t.light_count),
            "Big Parcels (P)": int(t.heavy_count),
            "Docs (D)": int(t.document_count),
            "p weight": float(t.light_weight),
            "P detail": format_number(t.heavy_weight),
            "Total Wt": float(t.total_weight),
            "Amount Logic": "",
            "Net Amount": float(t.grand_total),
        })

    return pl.DataFrame(rows, schema=_STATEMENT_SCHEMA)


def tier_frame(statement: ConsolidatedStatement) -> pl.DataFrame:
    """Long-format tier totals per line (manifest, tier, weight, amount)."""
    records = []
    for line in statement.lines:
        for tier, weight, amount in (
            ("S1", line.tier1_weight, line.tier1_total),
            ("S2", line.tier2_weight, line.tier2_total),
            ("S3", line.tier3_weight, line.tier3_total),
            ("Doc", line.document_count, line.document_total),
        ):
            records.append({
                "manifest_number": line.manifest_number,
                "tier": tier,
                "weight": float(weight),
                "amount": float(amount),
            })
    return pl.DataFrame(
        records,
        schema={"manifest_number": pl.Utf8, "tier": pl.Utf8, "weight": pl.Float64, "amount": pl.Float64},
    )


# =============================================================================
# PAGINATION
# =============================================================================

def page_subtotals(statement: ConsolidatedStatement, rows_per_page: int = ROWS_PER_PAGE) -> list[float]:
    """
    Sum of line totals for each printed page.

    Raises:
        ValueError: If rows_per_page < 1
    """
    if rows_per_page < 1:
        raise ValueError(f"rows_per_page must be at least 1, got {rows_per_page}")

    totals = [line.line_total for line in statement.lines]
    return [
        sum(totals[start:start + rows_per_page])
        for start in range(0, len(totals), rows_per_page)
    ]
