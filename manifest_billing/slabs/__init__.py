"""
Slabs Package

Exports all slab classes in billing order.

The tariff splits a rounded parcel weight across three contiguous bands.
Boundaries are fixed; only the per-kg rates vary (see RateTable).
"""

from .base import Slab
from .slab_1 import S1
from .slab_2 import S2
from .slab_3 import S3
from ..data.reference.classification import LIGHT_PARCEL_MAX_KG, HEAVY_TIER1_KG


# All slabs, lowest band first
ALL = [S1, S2, S3]


# =============================================================================
# VALIDATION
# =============================================================================

def validate_slabs() -> None:
    """
    Validate slab configuration integrity.

    Raises ValueError if any configuration issues are found.
    Called at import time to fail fast on configuration errors.
    """
    errors = []

    if ALL[0].lower_kg != 0:
        errors.append(f"{ALL[0].name}: first slab must start at 0kg, got {ALL[0].lower_kg}")

    for lower, upper in zip(ALL, ALL[1:]):
        # Bands must be contiguous
        if lower.upper_kg is None:
            errors.append(f"{lower.name}: only the last slab may be open-ended")
        elif lower.upper_kg != upper.lower_kg:
            errors.append(
                f"{lower.name}/{upper.name}: gap or overlap between "
                f"{lower.upper_kg}kg and {upper.lower_kg}kg"
            )

    if ALL[-1].upper_kg is not None:
        errors.append(f"{ALL[-1].name}: last slab must be open-ended")

    for s in ALL:
        if s.upper_kg is not None and s.upper_kg <= s.lower_kg:
            errors.append(f"{s.name}: upper_kg must be greater than lower_kg")

    # Consolidated statements bill HEAVY_TIER1_KG of S1 per heavy parcel
    if HEAVY_TIER1_KG != S1.upper_kg:
        errors.append(
            f"HEAVY_TIER1_KG ({HEAVY_TIER1_KG}) must equal {S1.name} upper bound ({S1.upper_kg})"
        )
    if LIGHT_PARCEL_MAX_KG != S1.upper_kg:
        errors.append(
            f"LIGHT_PARCEL_MAX_KG ({LIGHT_PARCEL_MAX_KG}) must equal {S1.name} upper bound ({S1.upper_kg})"
        )

    if errors:
        raise ValueError("Slab configuration errors:\n  " + "\n  ".join(errors))


# Run validation at import time
validate_slabs()

__all__ = [
    "Slab",
    "S1",
    "S2",
    "S3",
    "ALL",
    "validate_slabs",
]
