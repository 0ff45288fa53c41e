"""
Reference Data

Static configuration for rates, classification and statements.
"""

from .rates import SLAB_1_RATE, SLAB_2_RATE, SLAB_3_RATE, DOCUMENT_RATE
from .classification import LIGHT_PARCEL_MAX_KG, HEAVY_TIER1_KG
from .statement import (
    DATE_FORMAT,
    DEFAULT_TITLE,
    TITLE_SEPARATOR,
    ROWS_PER_PAGE,
    HEAVY_DETAIL_SEPARATOR,
)

__all__ = [
    "SLAB_1_RATE",
    "SLAB_2_RATE",
    "SLAB_3_RATE",
    "DOCUMENT_RATE",
    "LIGHT_PARCEL_MAX_KG",
    "HEAVY_TIER1_KG",
    "DATE_FORMAT",
    "DEFAULT_TITLE",
    "TITLE_SEPARATOR",
    "ROWS_PER_PAGE",
    "HEAVY_DETAIL_SEPARATOR",
]
