"""
Manifest Summary

Reduces a manifest's priced line items to counts, weights and slab totals.
"""

from ..models import LineItem, Manifest, ManifestSummary, RateTable
from ..pricing import billable_weight, price_parcel
from ..slabs import S1, S2, S3
from ..data.reference.classification import LIGHT_PARCEL_MAX_KG


def summarize(items: list[LineItem] | tuple[LineItem, ...], rates: RateTable) -> ManifestSummary:
    """
    Summarize priced line items in a single pass.

    Args:
        items: Priced line items in manifest order
        rates: The manifest's own rate table

    Returns:
        ManifestSummary where:
            - documents count towards document_count / document_total
            - parcels are re-slabbed with price_parcel() for tier weights
            - light parcels (rounded <= 10kg) add to light_parcel_weight
            - heavy parcels (rounded > 10kg) keep their weights, in order

    total_amount equals the sum of line amounts for slab-priced manifests.
    Manual-rate parcels are summarized by weight like any other parcel.
    """
    document_count = 0
    document_total = 0.0
    parcel_count = 0
    total_billable_weight = 0
    light_count = 0
    light_weight = 0
    heavy_weights = []
    tier1 = tier2 = tier3 = 0

    for item in items:
        if item.is_document:
            document_count += 1
            document_total += item.amount
            continue

        parcel_count += 1
        rounded = billable_weight(item.weight)
        total_billable_weight += rounded

        if rounded <= LIGHT_PARCEL_MAX_KG:
            light_count += 1
            light_weight += rounded
        else:
            heavy_weights.append(rounded)

        charge = price_parcel(item.weight, rates)
        tier1 += charge.tier1_weight
        tier2 += charge.tier2_weight
        tier3 += charge.tier3_weight

    tier1_total = tier1 * rates.rate_for(S1)
    tier2_total = tier2 * rates.rate_for(S2)
    tier3_total = tier3 * rates.rate_for(S3)

    return ManifestSummary(
        document_count=document_count,
        document_total=document_total,
        parcel_count=parcel_count,
        total_billable_weight=total_billable_weight,
        light_parcel_count=light_count,
        light_parcel_weight=light_weight,
        heavy_parcel_count=len(heavy_weights),
        heavy_weights=tuple(heavy_weights),
        tier1_weight=tier1,
        tier2_weight=tier2,
        tier3_weight=tier3,
        tier1_total=tier1_total,
        tier2_total=tier2_total,
        tier3_total=tier3_total,
        total_amount=tier1_total + tier2_total + tier3_total + document_total,
    )


def summarize_manifest(manifest: Manifest) -> ManifestSummary:
    """Summarize a saved manifest with the rates stored alongside it."""
    return summarize(manifest.items, manifest.rates)
