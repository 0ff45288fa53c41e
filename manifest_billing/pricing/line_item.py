"""
Line Item Calculator

Derives rate, amount and breakdown for a single line item. Every call
recomputes all three from scratch, so toggling is_manual_rate or changing
the type, weight or rates can never leave a stale amount behind.

LENIENCY POLICY
---------------
A negative, NaN or infinite weight (or manual rate) is priced as zero
instead of raising. The editor re-prices on every keystroke and must always
have something consistent to render; callers that want strict input should
validate before pricing.
"""

from dataclasses import replace

from ..formatting import format_number
from ..models import LineItem, RateTable, safe_number
from ..slabs import ALL as ALL_SLABS
from .parcel import billable_weight, price_parcel


DOCUMENT_BREAKDOWN = "Flat document rate"
MANUAL_BREAKDOWN = "Manual rate entered"


def price_line_item(item: LineItem, rates: RateTable) -> LineItem:
    """
    Price a line item against a rate table.

    Args:
        item: Line item with type, weight and (for manual rates) rate set
        rates: Rate table of the owning manifest

    Returns:
        Copy of the item with rate, amount and breakdown freshly derived.
        All other fields pass through unchanged.
    """
    if item.is_document:
        return replace(
            item,
            rate=rates.document_rate,
            amount=rates.document_rate,
            breakdown=DOCUMENT_BREAKDOWN,
        )

    if item.is_manual_rate:
        manual = safe_number(item.rate)
        return replace(item, rate=manual, amount=manual, breakdown=MANUAL_BREAKDOWN)

    weight = safe_number(item.weight)
    charge = price_parcel(weight, rates)
    billable = billable_weight(weight)

    return replace(
        item,
        rate=charge.amount / max(billable, 1),
        amount=charge.amount,
        breakdown=_parcel_breakdown(weight, billable, charge, rates),
    )


def reprice_items(items, rates: RateTable) -> tuple[LineItem, ...]:
    """Price every item against the same rate table, preserving order."""
    return tuple(price_line_item(item, rates) for item in items)


def _parcel_breakdown(weight: float, billable: int, charge, rates: RateTable) -> str:
    """
    Human-readable trace of a slab-priced amount.

    Example: "12.4kg rounded up to 13kg. S1 10kg x 3 = 30 + S2 3kg x 2 = 6"
    Only slabs carrying weight are listed.
    """
    tier_weights = (charge.tier1_weight, charge.tier2_weight, charge.tier3_weight)

    parts = []
    for slab, kg in zip(ALL_SLABS, tier_weights):
        if kg == 0:
            continue
        rate = rates.rate_for(slab)
        parts.append(
            f"{slab.name} {kg}kg x {format_number(rate)} = {format_number(kg * rate)}"
        )

    text = " + ".join(parts) if parts else "0kg, nothing to charge"

    if weight != billable:
        text = f"{format_number(weight)}kg rounded up to {billable}kg. {text}"

    return text
