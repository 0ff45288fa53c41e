"""
Slab 1 (S1)

First 10kg of every parcel. Light parcels bill entirely in S1.
"""

from .base import Slab


class S1(Slab):
    """0-10kg band."""

    name = "S1"
    label = "0-10kg"

    lower_kg = 0
    upper_kg = 10

    rate_field = "slab1_rate"
