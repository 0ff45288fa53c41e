"""
Parcel Classification

Light parcels bill entirely inside S1. Heavy parcels have used up all of
S1 before anything else is charged, so on a consolidated statement each
heavy parcel contributes exactly HEAVY_TIER1_KG to S1 weight.

Both constants must equal the S1 upper bound. This is checked when the
slabs package is imported.
"""

LIGHT_PARCEL_MAX_KG = 10      # Rounded weight <= this is a light parcel (p)
HEAVY_TIER1_KG = 10           # S1 weight carried by every heavy parcel (P)
