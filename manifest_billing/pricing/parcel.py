"""
Slab Pricing Calculator

Splits a parcel weight across the slabs and prices each band. This is the
only place tier weights are derived; the line item calculator, the
manifest summary and the consolidated statement all call price_parcel().
"""

import math
from typing import NamedTuple

from ..models import RateTable, safe_number
from ..slabs import S1, S2, S3


class ParcelCharge(NamedTuple):
    tier1_weight: int
    tier2_weight: int
    tier3_weight: int
    amount: float


def billable_weight(weight: float) -> int:
    """Weight rounded up to the next whole kilogram."""
    return math.ceil(safe_number(weight))


def price_parcel(weight: float, rates: RateTable) -> ParcelCharge:
    """
    Price one parcel under the three-slab tariff.

    Args:
        weight: Actual weight in kg (rounded up before slabbing)
        rates: Rate table supplying the per-kg slab rates

    Returns:
        ParcelCharge with the kg in each slab and the total amount

    Example (S1=3, S2=2, S3=1):
        55kg  -> tier1=10, tier2=45, tier3=0,  amount=120
        120kg -> tier1=10, tier2=90, tier3=20, amount=230
    """
    w = billable_weight(weight)

    tier1 = S1.weight(w)
    tier2 = S2.weight(w)
    tier3 = S3.weight(w)

    amount = (
        tier1 * rates.rate_for(S1) +
        tier2 * rates.rate_for(S2) +
        tier3 * rates.rate_for(S3)
    )

    return ParcelCharge(tier1, tier2, tier3, amount)
