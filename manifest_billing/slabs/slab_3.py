"""
Slab 3 (S3)

Everything above 100kg. Open-ended.
"""

from .base import Slab


class S3(Slab):
    """Above 100kg."""

    name = "S3"
    label = ">100kg"

    lower_kg = 100
    upper_kg = None

    rate_field = "slab3_rate"
