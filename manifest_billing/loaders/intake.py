"""
Record Intake

Converts loosely-typed records (exported manifest JSON, document extraction
output) into LineItem / Manifest once, at the boundary. Nothing untyped is
passed into the pricing functions.

RECORD SHAPE
------------
Field names follow the JSON the billing tool has always exported:

    {
        "manifestNo": "MF-1001",
        "manifestDate": "05/03/2025",
        "config": {"parcelSlab1Rate": 3, "parcelSlab2Rate": 2,
                   "parcelSlab3Rate": 1, "documentRate": 5},
        "rows": [
            {"slNo": 1, "serialNo": "AWB1", "description": "...",
             "type": "Parcel", "weight": 12.5, "isManualRate": false}
        ]
    }

"rows" is required and must be a list. Everything else is defaulted.

Statement override files are validated here too (RawOverride), one record
per manifest.
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import ConsolidatedOverride, ItemType, LineItem, Manifest, RateTable, safe_number
from ..pricing import build_manifest
from ..data.reference.statement import DATE_FORMAT
from ..version import VERSION


# =============================================================================
# RECORD MODELS
# =============================================================================

class RawLineItem(BaseModel):
    """One row as found in JSON or extraction output."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = None
    sequence_number: Optional[int] = Field(default=None, alias="slNo")
    reference_code: Optional[str] = Field(default=None, alias="serialNo")
    description: Optional[str] = None
    item_type: ItemType = Field(default=ItemType.PARCEL, alias="type")
    weight: float = 0.0
    is_manual_rate: bool = Field(default=False, alias="isManualRate")
    rate: float = 0.0

    @field_validator("item_type", mode="before")
    @classmethod
    def _parse_type(cls, v: Any) -> ItemType:
        # Anything that is not explicitly a document is billed as a parcel
        if isinstance(v, ItemType):
            return v
        if isinstance(v, str) and v.strip().lower() == "document":
            return ItemType.DOCUMENT
        return ItemType.PARCEL

    @field_validator("weight", "rate", mode="before")
    @classmethod
    def _number_or_zero(cls, v: Any) -> float:
        if v is None or isinstance(v, bool):
            return 0.0
        try:
            return float(v)
        except (TypeError, ValueError):
            return 0.0

    @field_validator("sequence_number", mode="before")
    @classmethod
    def _int_or_none(cls, v: Any) -> Optional[int]:
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    @field_validator("is_manual_rate", mode="before")
    @classmethod
    def _bool_or_false(cls, v: Any) -> bool:
        return v is True

    @field_validator("id", "reference_code", "description", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _as_text(v)

    def to_line_item(self, index: int, reference_default: str = "", description_default: str = "") -> LineItem:
        """Unpriced LineItem; index is the 0-based position in the record."""
        return LineItem(
            id=self.id or str(uuid.uuid4()),
            sequence_number=self.sequence_number or index + 1,
            reference_code=self.reference_code or reference_default,
            description=self.description or description_default,
            item_type=self.item_type,
            weight=self.weight,
            is_manual_rate=self.is_manual_rate,
            rate=self.rate,
        )


class RawRateTable(BaseModel):
    """Rate table as stored with an exported manifest."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    slab1_rate: Optional[float] = Field(default=None, alias="parcelSlab1Rate")
    slab2_rate: Optional[float] = Field(default=None, alias="parcelSlab2Rate")
    slab3_rate: Optional[float] = Field(default=None, alias="parcelSlab3Rate")
    document_rate: Optional[float] = Field(default=None, alias="documentRate")

    def to_rate_table(self, fallback: RateTable) -> RateTable:
        """Missing rates are taken from fallback."""
        return RateTable(
            slab1_rate=_pick(self.slab1_rate, fallback.slab1_rate),
            slab2_rate=_pick(self.slab2_rate, fallback.slab2_rate),
            slab3_rate=_pick(self.slab3_rate, fallback.slab3_rate),
            document_rate=_pick(self.document_rate, fallback.document_rate),
        )


class RawManifest(BaseModel):
    """A whole manifest record. rows is required."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = None
    manifest_number: Optional[str] = Field(default=None, alias="manifestNo")
    manifest_date: Optional[str] = Field(default=None, alias="manifestDate")
    rows: list[RawLineItem]
    config: Optional[RawRateTable] = None
    created_at: Optional[int] = Field(default=None, alias="createdAt")
    folder_id: Optional[str] = Field(default=None, alias="folderId")

    @field_validator("id", "manifest_number", "manifest_date", "folder_id", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _as_text(v)


class RawOverride(BaseModel):
    """
    One manifest's statement corrections, as written in an overrides file.

    Accepts the field names of ConsolidatedOverride or the short keys the
    billing tool stores (no, pCount, PCount, dCount, pWeight, PDetail).
    Numeric strings are coerced; values that are not numbers are rejected.
    Negative counts and weights become 0.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date: Optional[str] = None
    manifest_number: Optional[str] = Field(default=None, alias="no")
    light_count: Optional[int] = Field(default=None, alias="pCount")
    heavy_count: Optional[int] = Field(default=None, alias="PCount")
    document_count: Optional[int] = Field(default=None, alias="dCount")
    light_weight: Optional[float] = Field(default=None, alias="pWeight")
    heavy_detail: Optional[str] = Field(default=None, alias="PDetail")

    @field_validator("date", "manifest_number", "heavy_detail", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return _as_text(v)

    @field_validator("light_count", "heavy_count", "document_count")
    @classmethod
    def _count(cls, v: Optional[int]) -> Optional[int]:
        return None if v is None else max(v, 0)

    @field_validator("light_weight")
    @classmethod
    def _weight(cls, v: Optional[float]) -> Optional[float]:
        return None if v is None else safe_number(v)

    def to_override(self) -> ConsolidatedOverride:
        return ConsolidatedOverride(**self.model_dump())


OVERRIDE_KEYS = frozenset(RawOverride.model_fields) | frozenset(
    f.alias for f in RawOverride.model_fields.values() if f.alias
)


def _as_text(v: Any) -> Optional[str]:
    # Numbers typed into text fields (e.g. "manifestNo": 1001) are kept as text
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


def _pick(value: Optional[float], fallback: float) -> float:
    return fallback if value is None else value


# =============================================================================
# CONVERSION
# =============================================================================

def rate_table_from_record(record: dict | None, fallback: RateTable) -> RateTable:
    """Rate table from a config record; fallback when the record is absent."""
    if not record:
        return fallback
    return RawRateTable.model_validate(record).to_rate_table(fallback)


def manifest_from_record(
    record: dict,
    default_rates: RateTable,
    folder_id: str | None = None,
    now: datetime | None = None,
    keep_id: bool = False,
) -> Manifest:
    """
    Validate a manifest record and price it.

    Args:
        record: Manifest JSON (see module docstring)
        default_rates: Used only when the record carries no config
        folder_id: Target folder (defaults to the record's folderId)
        now: Clock for generated numbers, dates and timestamps
        keep_id: Keep the record's id and createdAt (loading from storage)
            instead of issuing new ones (importing)

    Returns:
        Manifest with every row re-priced and totals recomputed

    Raises:
        pydantic.ValidationError: If rows is missing or not a list
    """
    now = now or datetime.now()
    raw = RawManifest.model_validate(record)

    rates = raw.config.to_rate_table(default_rates) if raw.config else default_rates
    items = [row.to_line_item(i) for i, row in enumerate(raw.rows)]

    if keep_id and raw.id:
        manifest_id = raw.id
    else:
        manifest_id = str(uuid.uuid4())

    if keep_id and raw.created_at is not None:
        created_at = datetime.fromtimestamp(raw.created_at / 1000)
    else:
        created_at = now

    return build_manifest(
        manifest_id=manifest_id,
        manifest_number=raw.manifest_number or f"IMP-{int(now.timestamp() * 1000)}",
        manifest_date=raw.manifest_date or now.strftime(DATE_FORMAT),
        items=items,
        rates=rates,
        created_at=created_at,
        folder_id=folder_id if folder_id is not None else raw.folder_id,
    )


def override_from_record(record: dict) -> ConsolidatedOverride:
    """
    Validate one override record.

    Raises:
        pydantic.ValidationError: If the record is not an object or a value
            has the wrong type (e.g. "light_weight": "abc")
    """
    return RawOverride.model_validate(record).to_override()


def line_items_from_extraction(items: list[dict], start_index: int = 0) -> list[LineItem]:
    """
    Unpriced line items from document extraction output.

    Each item may carry slNo, serialNo, description, type and weight.
    Missing values default to: position-based sequence number,
    "AWB-<1000 + position>", "Processed Item", Parcel, 0kg.
    """
    line_items = []
    for offset, item in enumerate(items):
        index = start_index + offset
        raw = RawLineItem.model_validate(item)
        line_items.append(raw.to_line_item(
            index,
            reference_default=f"AWB-{1000 + index}",
            description_default="Processed Item",
        ))
    return line_items


def rate_table_to_record(rates: RateTable) -> dict:
    return {
        "parcelSlab1Rate": rates.slab1_rate,
        "parcelSlab2Rate": rates.slab2_rate,
        "parcelSlab3Rate": rates.slab3_rate,
        "documentRate": rates.document_rate,
    }


def line_item_to_record(item: LineItem) -> dict:
    return {
        "id": item.id,
        "slNo": item.sequence_number,
        "serialNo": item.reference_code,
        "description": item.description,
        "type": item.item_type.value,
        "weight": item.weight,
        "isManualRate": item.is_manual_rate,
        "rate": item.rate,
        "amount": item.amount,
        "breakdown": item.breakdown,
    }


def manifest_to_record(manifest: Manifest) -> dict:
    """Manifest as JSON-ready dict, in the same shape manifest_from_record reads."""
    record = {
        "id": manifest.id,
        "manifestNo": manifest.manifest_number,
        "manifestDate": manifest.manifest_date,
        "rows": [line_item_to_record(item) for item in manifest.items],
        "config": rate_table_to_record(manifest.rates),
        "totalAmount": manifest.total_amount,
        "itemCount": manifest.item_count,
        "createdAt": int(manifest.created_at.timestamp() * 1000),
        "calculatorVersion": VERSION,
    }
    if manifest.folder_id is not None:
        record["folderId"] = manifest.folder_id
    return record
