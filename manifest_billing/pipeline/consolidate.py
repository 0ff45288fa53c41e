"""
Consolidated Statement

Merges many manifests, plus optional per-field overrides, into statement
lines and grand totals.

RECONCILIATION RULE
-------------------
Overrides replace summary values field by field, so slab weights have to
be re-derived from the resolved values rather than copied:

    S1 weight = light parcel weight + heavy parcel count * 10
    S2 / S3   = each heavy weight through price_parcel(), summed

Every heavy parcel (rounded > 10kg) has already filled S1, so its S1 share
is exactly 10kg whatever it weighs. S2 and S3 depend on each parcel's own
weight and cannot be derived from an aggregate. With no override the line
total equals the manifest summary total.

Malformed heavy detail text never raises. Tokens without a leading number
are dropped, and negative weights count as 0kg but still count as parcels.
"""

import re
from datetime import datetime

from dateutil import parser as date_parser

from ..models import (
    ConsolidatedOverride,
    ConsolidatedStatement,
    ConsolidatedStatementLine,
    Manifest,
    StatementTotals,
    safe_number,
)
from ..pricing import price_parcel
from ..slabs import S1, S2, S3
from ..data.reference.classification import HEAVY_TIER1_KG
from ..data.reference.statement import DATE_FORMAT, DEFAULT_TITLE, HEAVY_DETAIL_SEPARATOR
from .summarize import summarize_manifest


# Leading number of a token: "15kg" -> "15", "-5" -> "-5"
_LEADING_NUMBER = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def build_statement(
    manifests: list[Manifest],
    overrides: dict[str, ConsolidatedOverride] | None = None,
    title: str | None = None,
) -> ConsolidatedStatement:
    """
    Build a consolidated statement.

    Args:
        manifests: Manifests to include, in any order
        overrides: Sparse corrections keyed by manifest id (optional)
        title: Statement title (defaults to "Consolidated Report")

    Returns:
        ConsolidatedStatement with lines sorted by resolved date (stable)
        and totals summed field by field over the lines
    """
    overrides = overrides or {}

    lines = [build_line(m, overrides.get(m.id)) for m in manifests]
    lines = sorted(lines, key=lambda line: _date_sort_key(line.date))

    return ConsolidatedStatement(
        lines=tuple(lines),
        totals=compute_totals(lines),
        title=title or DEFAULT_TITLE,
    )


# =============================================================================
# LINE RESOLUTION
# =============================================================================

def resolve(override_value, computed_value):
    """Override value when one was given, otherwise the computed value."""
    return computed_value if override_value is None else override_value


def build_line(manifest: Manifest, override: ConsolidatedOverride | None = None) -> ConsolidatedStatementLine:
    """
    Resolve one manifest's statement line.

    Heavy count falls back in order: explicit count override, length of an
    overridden heavy detail list, computed heavy parcel count.
    """
    summary = summarize_manifest(manifest)
    o = override or ConsolidatedOverride()
    rates = manifest.rates

    date = resolve(o.date, manifest.manifest_date)
    number = resolve(o.manifest_number, manifest.manifest_number)
    light_count = resolve(o.light_count, summary.light_parcel_count)
    document_count = resolve(o.document_count, summary.document_count)
    light_weight = resolve(o.light_weight, summary.light_parcel_weight)

    if o.heavy_detail is not None:
        heavy_weights = tuple(parse_heavy_detail(o.heavy_detail))
        derived_heavy_count = len(heavy_weights)
    else:
        heavy_weights = summary.heavy_weights
        derived_heavy_count = summary.heavy_parcel_count

    heavy_count = resolve(o.heavy_count, derived_heavy_count)
    heavy_total = sum(heavy_weights)

    # Re-derive slab weights from the resolved values
    tier1_weight = light_weight + heavy_count * HEAVY_TIER1_KG
    tier2_weight = 0
    tier3_weight = 0
    for weight in heavy_weights:
        charge = price_parcel(weight, rates)
        tier2_weight += charge.tier2_weight
        tier3_weight += charge.tier3_weight

    tier1_total = tier1_weight * rates.rate_for(S1)
    tier2_total = tier2_weight * rates.rate_for(S2)
    tier3_total = tier3_weight * rates.rate_for(S3)
    document_total = document_count * rates.document_rate

    return ConsolidatedStatementLine(
        manifest_id=manifest.id,
        date=date,
        manifest_number=number,
        rates=rates,
        light_count=light_count,
        heavy_count=heavy_count,
        document_count=document_count,
        light_weight=light_weight,
        heavy_weights=heavy_weights,
        heavy_total=heavy_total,
        total_weight=light_weight + heavy_total,
        tier1_weight=tier1_weight,
        tier2_weight=tier2_weight,
        tier3_weight=tier3_weight,
        tier1_total=tier1_total,
        tier2_total=tier2_total,
        tier3_total=tier3_total,
        document_total=document_total,
        line_total=tier1_total + tier2_total + tier3_total + document_total,
        override=override,
    )


def parse_heavy_detail(text: str | None) -> list[float]:
    """
    Parse heavy parcel detail text into weights.

    "15+20+30"  -> [15.0, 20.0, 30.0]
    "15kg+20"   -> [15.0, 20.0]
    "15+-5"     -> [15.0, 0.0]
    "15+abc+30" -> [15.0, 30.0]
    ""          -> []

    Each token is read up to the end of its leading number. Tokens with no
    leading number are dropped. Negative and infinite weights count as 0kg.
    """
    if not text:
        return []

    weights = []
    for token in text.split(HEAVY_DETAIL_SEPARATOR):
        match = _LEADING_NUMBER.match(token.strip())
        if match is None:
            continue
        weights.append(safe_number(match.group(0)))

    return weights


# =============================================================================
# TOTALS
# =============================================================================

def compute_totals(lines) -> StatementTotals:
    """Field-wise sum over statement lines."""
    return StatementTotals(
        light_count=sum(line.light_count for line in lines),
        heavy_count=sum(line.heavy_count for line in lines),
        document_count=sum(line.document_count for line in lines),
        light_weight=sum(line.light_weight for line in lines),
        heavy_weight=sum(line.heavy_total for line in lines),
        total_weight=sum(line.total_weight for line in lines),
        tier1_weight=sum(line.tier1_weight for line in lines),
        tier2_weight=sum(line.tier2_weight for line in lines),
        tier3_weight=sum(line.tier3_weight for line in lines),
        tier1_total=sum(line.tier1_total for line in lines),
        tier2_total=sum(line.tier2_total for line in lines),
        tier3_total=sum(line.tier3_total for line in lines),
        document_total=sum(line.document_total for line in lines),
        grand_total=sum(line.line_total for line in lines),
    )


# =============================================================================
# DATES
# =============================================================================

def parse_manifest_date(text: str | None) -> datetime | None:
    """
    Parse a manifest date.

    DD/MM/YYYY first, then a generic parse. Returns None if neither works.
    """
    if not text:
        return None

    text = text.strip()
    try:
        return datetime.strptime(text, DATE_FORMAT)
    except ValueError:
        pass

    try:
        return date_parser.parse(text).replace(tzinfo=None)
    except (ValueError, OverflowError):
        return None


def _date_sort_key(text: str) -> tuple[int, datetime]:
    """Parseable dates ascending, unparseable dates after all of them."""
    parsed = parse_manifest_date(text)
    if parsed is None:
        return (1, datetime.min)
    return (0, parsed)


# =============================================================================
# WARNINGS
# =============================================================================

def heavy_detail_warnings(statement: ConsolidatedStatement) -> list[str]:
    """
    Manifest numbers whose heavy detail override lost tokens when parsed.

    The builder never signals errors; callers compare input text with the
    resolved weights to decide what to show the user.
    """
    warnings = []
    for line in statement.lines:
        if line.override is None or line.override.heavy_detail is None:
            continue
        tokens = [
            t for t in line.override.heavy_detail.split(HEAVY_DETAIL_SEPARATOR)
            if t.strip()
        ]
        if len(tokens) != len(line.heavy_weights):
            warnings.append(line.manifest_number)
    return warnings
