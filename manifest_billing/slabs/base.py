"""
Slab Base Class

Shared base class for the weight slabs of the parcel tariff.
"""

from abc import ABC


class Slab(ABC):
    """
    Base class for all weight slabs.

    Attributes:
        IDENTITY
            name        - Short code (e.g., "S1")
            label       - Human-readable band (e.g., "0-10kg")

        BAND
            lower_kg    - Exclusive lower bound of the band
            upper_kg    - Inclusive upper bound, None for the open-ended top slab

        PRICING
            rate_field  - RateTable attribute holding this slab's per-kg rate
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str
    label: str

    # -------------------------------------------------------------------------
    # BAND
    # -------------------------------------------------------------------------
    lower_kg: int
    upper_kg: int | None = None

    # -------------------------------------------------------------------------
    # PRICING
    # -------------------------------------------------------------------------
    rate_field: str

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def width(cls) -> int | None:
        """Kilograms the band can hold, None if open-ended."""
        if cls.upper_kg is None:
            return None
        return cls.upper_kg - cls.lower_kg

    @classmethod
    def weight(cls, billable_weight: int) -> int:
        """Portion of a rounded parcel weight that falls inside this band."""
        above = max(billable_weight - cls.lower_kg, 0)
        if cls.upper_kg is None:
            return above
        return min(above, cls.width())

    @classmethod
    def charge(cls, billable_weight: int, rates) -> float:
        """Band weight times the slab rate from a RateTable."""
        return cls.weight(billable_weight) * rates.rate_for(cls)
