"""
Slab 2 (S2)

Weight above 10kg up to 100kg.
"""

from .base import Slab


class S2(Slab):
    """10-100kg band."""

    name = "S2"
    label = "10-100kg"

    lower_kg = 10
    upper_kg = 100

    rate_field = "slab2_rate"
