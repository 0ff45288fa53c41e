"""
Pricing Package

- parcel: Slab pricing calculator (weight + rates -> tier weights + amount)
- line_item: Line item calculator (document / slab / manual branches)
- manifest: Manifest assembly with recomputed totals
"""

from .parcel import ParcelCharge, billable_weight, price_parcel
from .line_item import (
    price_line_item,
    reprice_items,
    DOCUMENT_BREAKDOWN,
    MANUAL_BREAKDOWN,
)
from .manifest import build_manifest, price_manifest, manifest_total

__all__ = [
    "ParcelCharge",
    "billable_weight",
    "price_parcel",
    "price_line_item",
    "reprice_items",
    "DOCUMENT_BREAKDOWN",
    "MANUAL_BREAKDOWN",
    "build_manifest",
    "price_manifest",
    "manifest_total",
]
