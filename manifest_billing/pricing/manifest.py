"""
Manifest Pricing

Assembles manifests from line items. Totals are always recomputed from
the items, never carried over from a previous save.
"""

from dataclasses import replace
from datetime import datetime

from ..models import LineItem, Manifest, RateTable
from .line_item import reprice_items


def build_manifest(
    manifest_id: str,
    manifest_number: str,
    manifest_date: str,
    items,
    rates: RateTable,
    created_at: datetime,
    folder_id: str | None = None,
) -> Manifest:
    """
    Price items against rates and wrap them in a Manifest.

    total_amount is the sum of line amounts, item_count the number of lines.
    """
    priced = reprice_items(items, rates)
    return Manifest(
        id=manifest_id,
        manifest_number=manifest_number,
        manifest_date=manifest_date,
        items=priced,
        rates=rates,
        total_amount=manifest_total(priced),
        item_count=len(priced),
        created_at=created_at,
        folder_id=folder_id,
    )


def price_manifest(manifest: Manifest, rates: RateTable | None = None) -> Manifest:
    """
    Re-price a manifest.

    Uses the manifest's own rates unless the caller substitutes a table.
    """
    rates = rates or manifest.rates
    priced = reprice_items(manifest.items, rates)
    return replace(
        manifest,
        items=priced,
        rates=rates,
        total_amount=manifest_total(priced),
        item_count=len(priced),
    )


def manifest_total(items: tuple[LineItem, ...]) -> float:
    return sum(item.amount for item in items)
