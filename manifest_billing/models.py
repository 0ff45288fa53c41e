"""
Billing Data Model

Frozen dataclasses passed between pipeline stages. Stages never mutate
their inputs; edits produce new instances with dataclasses.replace().
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ItemType(str, Enum):
    PARCEL = "Parcel"
    DOCUMENT = "Document"


@dataclass(frozen=True)
class RateTable:
    """
    Snapshot of the rates a manifest was priced with.

    slab*_rate are per kg (parcels), document_rate is flat per document.
    """
    slab1_rate: float
    slab2_rate: float
    slab3_rate: float
    document_rate: float

    def rate_for(self, slab) -> float:
        """Per-kg rate for a slab class (S1, S2, S3)."""
        return getattr(self, slab.rate_field)


@dataclass(frozen=True)
class LineItem:
    """
    One billable entry on a manifest.

    rate, amount and breakdown are derived by price_line_item() and are
    only meaningful after pricing. For manual-rate parcels, rate is the
    value the user typed and is billed as-is.
    """
    id: str
    sequence_number: int                 # 1-based display order
    reference_code: str = ""             # Serial / AWB number
    description: str = ""
    item_type: ItemType = ItemType.PARCEL
    weight: float = 0.0                  # kg, parcels only
    is_manual_rate: bool = False
    rate: float = 0.0
    amount: float = 0.0
    breakdown: str = ""

    @property
    def is_document(self) -> bool:
        return self.item_type == ItemType.DOCUMENT


@dataclass(frozen=True)
class Folder:
    id: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Manifest:
    """A saved billing document: priced line items plus the rates used."""
    id: str
    manifest_number: str
    manifest_date: str                   # DD/MM/YYYY as entered
    items: tuple[LineItem, ...]
    rates: RateTable
    total_amount: float
    item_count: int
    created_at: datetime
    folder_id: str | None = None


@dataclass(frozen=True)
class ManifestSummary:
    """
    Aggregates for one manifest. Derived on demand, never stored.

    Light parcels: rounded weight <= 10kg (p).
    Heavy parcels: rounded weight > 10kg (P), weights kept in manifest order.
    """
    document_count: int = 0
    document_total: float = 0.0
    parcel_count: int = 0
    total_billable_weight: int = 0
    light_parcel_count: int = 0
    light_parcel_weight: int = 0
    heavy_parcel_count: int = 0
    heavy_weights: tuple[int, ...] = ()
    tier1_weight: int = 0
    tier2_weight: int = 0
    tier3_weight: int = 0
    tier1_total: float = 0.0
    tier2_total: float = 0.0
    tier3_total: float = 0.0
    total_amount: float = 0.0

    @property
    def heavy_total(self) -> int:
        return sum(self.heavy_weights)


@dataclass(frozen=True)
class ConsolidatedOverride:
    """
    Per-manifest corrections for a consolidated statement.

    None means "use the computed value". heavy_detail is the text form of
    the heavy parcel weights, e.g. "15+20+30".
    """
    date: str | None = None
    manifest_number: str | None = None
    light_count: int | None = None
    heavy_count: int | None = None
    document_count: int | None = None
    light_weight: float | None = None
    heavy_detail: str | None = None


@dataclass(frozen=True)
class ConsolidatedStatementLine:
    manifest_id: str
    date: str
    manifest_number: str
    rates: RateTable
    light_count: int
    heavy_count: int
    document_count: int
    light_weight: float
    heavy_weights: tuple[float, ...]
    heavy_total: float
    total_weight: float
    tier1_weight: float
    tier2_weight: float
    tier3_weight: float
    tier1_total: float
    tier2_total: float
    tier3_total: float
    document_total: float
    line_total: float
    override: ConsolidatedOverride | None = None


@dataclass(frozen=True)
class StatementTotals:
    light_count: int = 0
    heavy_count: int = 0
    document_count: int = 0
    light_weight: float = 0.0
    heavy_weight: float = 0.0
    total_weight: float = 0.0
    tier1_weight: float = 0.0
    tier2_weight: float = 0.0
    tier3_weight: float = 0.0
    tier1_total: float = 0.0
    tier2_total: float = 0.0
    tier3_total: float = 0.0
    document_total: float = 0.0
    grand_total: float = 0.0


@dataclass(frozen=True)
class ConsolidatedStatement:
    lines: tuple[ConsolidatedStatementLine, ...]
    totals: StatementTotals = field(default_factory=StatementTotals)
    title: str = ""


def safe_number(value) -> float:
    """Coerce to a finite, non-negative float. Anything else becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
