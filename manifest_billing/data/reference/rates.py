"""
Default Slab Rates

Rates used for new billing sessions and for imports that arrive without
their own rate table. Saved manifests always keep the rates they were
priced with.
Last updated: 2025-11-03
"""

SLAB_1_RATE = 3.0             # Per kg, 0-10kg
SLAB_2_RATE = 2.0             # Per kg, 10-100kg
SLAB_3_RATE = 1.0             # Per kg, above 100kg
DOCUMENT_RATE = 5.0           # Flat, per document
