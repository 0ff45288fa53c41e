"""
Billing Data

Reference configuration and the default rate table.

Structure:
    - reference/: Static reference data (rates, classification, statement layout)
"""

from ..models import RateTable
from .reference.rates import SLAB_1_RATE, SLAB_2_RATE, SLAB_3_RATE, DOCUMENT_RATE
from .reference.classification import LIGHT_PARCEL_MAX_KG, HEAVY_TIER1_KG
from .reference.statement import (
    DATE_FORMAT,
    DEFAULT_TITLE,
    TITLE_SEPARATOR,
    ROWS_PER_PAGE,
    HEAVY_DETAIL_SEPARATOR,
)


DEFAULT_RATES = RateTable(
    slab1_rate=SLAB_1_RATE,
    slab2_rate=SLAB_2_RATE,
    slab3_rate=SLAB_3_RATE,
    document_rate=DOCUMENT_RATE,
)

__all__ = [
    "DEFAULT_RATES",
    # Rates
    "SLAB_1_RATE",
    "SLAB_2_RATE",
    "SLAB_3_RATE",
    "DOCUMENT_RATE",
    # Classification
    "LIGHT_PARCEL_MAX_KG",
    "HEAVY_TIER1_KG",
    # Statement
    "DATE_FORMAT",
    "DEFAULT_TITLE",
    "TITLE_SEPARATOR",
    "ROWS_PER_PAGE",
    "HEAVY_DETAIL_SEPARATOR",
]
