"""
Unit Tests for Slab and Line Item Pricing

Tests tier decomposition, the document / manual / slab branches, and
lenient handling of bad weights.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import math
from dataclasses import replace
from datetime import datetime

import pytest

from manifest_billing.models import ItemType, LineItem, RateTable
from manifest_billing.pricing import (
    DOCUMENT_BREAKDOWN,
    MANUAL_BREAKDOWN,
    billable_weight,
    build_manifest,
    price_line_item,
    price_manifest,
    price_parcel,
    reprice_items,
)
from manifest_billing.slabs import S1, S2, S3, ALL, validate_slabs


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def rates():
    """Default tariff: S1=3, S2=2, S3=1 per kg, documents 5 flat."""
    return RateTable(slab1_rate=3, slab2_rate=2, slab3_rate=1, document_rate=5)


def parcel(weight, **kwargs) -> LineItem:
    return LineItem(id="p", sequence_number=1, weight=weight, **kwargs)


def document(**kwargs) -> LineItem:
    return LineItem(id="d", sequence_number=1, item_type=ItemType.DOCUMENT, **kwargs)


# =============================================================================
# SLAB CONFIGURATION TESTS
# =============================================================================

class TestSlabs:
    """Tests for slab band configuration."""

    def test_configuration_is_valid(self):
        """Shipped slab configuration passes validation."""
        validate_slabs()

    def test_bands_are_contiguous(self):
        """Each slab starts where the previous one ends."""
        assert [s.lower_kg for s in ALL] == [0, 10, 100]
        assert [s.upper_kg for s in ALL] == [10, 100, None]

    def test_widths(self):
        """S1 holds 10kg, S2 holds 90kg, S3 is open-ended."""
        assert S1.width() == 10
        assert S2.width() == 90
        assert S3.width() is None

    def test_slab_charge(self, rates):
        """Slab charge is the band weight times its rate."""
        assert S2.charge(55, rates) == pytest.approx(90)
        assert S3.charge(55, rates) == 0


# =============================================================================
# SLAB PRICING TESTS
# =============================================================================

class TestPriceParcel:
    """Tests for price_parcel tier decomposition."""

    def test_light_parcel(self, rates):
        """7kg stays in S1: 7 * 3 = 21."""
        charge = price_parcel(7, rates)
        assert (charge.tier1_weight, charge.tier2_weight, charge.tier3_weight) == (7, 0, 0)
        assert charge.amount == pytest.approx(21)

    def test_mid_parcel(self, rates):
        """55kg: 10 * 3 + 45 * 2 = 120."""
        charge = price_parcel(55, rates)
        assert (charge.tier1_weight, charge.tier2_weight, charge.tier3_weight) == (10, 45, 0)
        assert charge.amount == pytest.approx(120)

    def test_heavy_parcel(self, rates):
        """120kg: 10 * 3 + 90 * 2 + 20 * 1 = 230."""
        charge = price_parcel(120, rates)
        assert (charge.tier1_weight, charge.tier2_weight, charge.tier3_weight) == (10, 90, 20)
        assert charge.amount == pytest.approx(230)

    def test_rounds_up_before_slabbing(self, rates):
        """10.1kg bills as 11kg, crossing into S2."""
        charge = price_parcel(10.1, rates)
        assert (charge.tier1_weight, charge.tier2_weight) == (10, 1)
        assert charge.amount == pytest.approx(32)

    def test_boundaries(self, rates):
        """Exactly 10kg and 100kg stay in the lower slab."""
        assert price_parcel(10, rates).tier2_weight == 0
        assert price_parcel(100, rates).tier3_weight == 0
        assert price_parcel(101, rates).tier3_weight == 1

    @pytest.mark.parametrize("weight", [0, 0.2, 1, 9.99, 10, 10.01, 37.5, 99.9, 100, 100.5, 250, 1234.56])
    def test_tiers_partition_rounded_weight(self, rates, weight):
        """tier1 + tier2 + tier3 always equals the rounded-up weight."""
        charge = price_parcel(weight, rates)
        total = charge.tier1_weight + charge.tier2_weight + charge.tier3_weight
        assert total == math.ceil(weight)

    @pytest.mark.parametrize("weight", [0.5, 3, 10])
    def test_up_to_10kg_only_s1(self, rates, weight):
        charge = price_parcel(weight, rates)
        assert charge.tier2_weight == 0 and charge.tier3_weight == 0

    @pytest.mark.parametrize("weight", [10.5, 50, 100])
    def test_10_to_100kg_no_s3(self, rates, weight):
        charge = price_parcel(weight, rates)
        assert charge.tier3_weight == 0
        assert charge.tier2_weight == math.ceil(weight) - 10

    @pytest.mark.parametrize("weight", [100.5, 150, 500])
    def test_over_100kg_fills_s2(self, rates, weight):
        charge = price_parcel(weight, rates)
        assert charge.tier2_weight == 90
        assert charge.tier3_weight == math.ceil(weight) - 100

    @pytest.mark.parametrize("weight", [-5, float("nan"), float("inf"), None, "abc"])
    def test_bad_weight_prices_as_zero(self, rates, weight):
        """Negative, non-finite and non-numeric weights never raise."""
        charge = price_parcel(weight, rates)
        assert charge == (0, 0, 0, 0)

    def test_billable_weight(self):
        assert billable_weight(12.01) == 13
        assert billable_weight(12) == 12
        assert billable_weight(-1) == 0


# =============================================================================
# LINE ITEM TESTS
# =============================================================================

class TestPriceLineItem:
    """Tests for the line item calculator branches."""

    def test_document_flat_rate(self, rates):
        """Documents are billed the flat document rate whatever they weigh."""
        item = price_line_item(document(weight=40), rates)
        assert item.amount == pytest.approx(5)
        assert item.rate == pytest.approx(5)
        assert item.breakdown == DOCUMENT_BREAKDOWN

    def test_document_ignores_manual_rate(self, rates):
        """Document branch wins over the manual rate flag."""
        item = price_line_item(document(is_manual_rate=True, rate=99), rates)
        assert item.amount == pytest.approx(5)

    def test_slab_parcel(self, rates):
        item = price_line_item(parcel(55), rates)
        assert item.amount == pytest.approx(120)
        assert item.rate == pytest.approx(120 / 55)
        assert "S1 10kg x 3 = 30" in item.breakdown
        assert "S2 45kg x 2 = 90" in item.breakdown

    def test_breakdown_mentions_rounding(self, rates):
        item = price_line_item(parcel(12.4), rates)
        assert item.breakdown == "12.4kg rounded up to 13kg. S1 10kg x 3 = 30 + S2 3kg x 2 = 6"

    def test_zero_weight(self, rates):
        """Zero weight prices as zero with rate 0."""
        item = price_line_item(parcel(0), rates)
        assert item.amount == 0
        assert item.rate == 0

    def test_manual_rate(self, rates):
        """Manual rate is billed as entered, no slabs applied."""
        item = price_line_item(parcel(55, is_manual_rate=True, rate=99.5), rates)
        assert item.amount == pytest.approx(99.5)
        assert item.rate == pytest.approx(99.5)
        assert item.breakdown == MANUAL_BREAKDOWN

    def test_manual_rate_negative_is_zero(self, rates):
        item = price_line_item(parcel(5, is_manual_rate=True, rate=-10), rates)
        assert item.amount == 0

    def test_toggle_manual_off_restores_slab_amount(self, rates):
        """Turning manual rate off re-derives the slab amount."""
        manual = price_line_item(parcel(55, is_manual_rate=True, rate=500), rates)
        slab = price_line_item(replace(manual, is_manual_rate=False), rates)
        assert slab.amount == pytest.approx(120)

    def test_idempotent(self, rates):
        """Re-pricing a priced item gives the same amount."""
        for item in (parcel(55), parcel(8.2), document(), parcel(30, is_manual_rate=True, rate=77)):
            once = price_line_item(item, rates)
            twice = price_line_item(once, rates)
            assert twice == once

    def test_weight_passes_through(self, rates):
        """Stored weight is not rounded or altered."""
        item = price_line_item(parcel(12.4), rates)
        assert item.weight == 12.4

    def test_negative_weight_priced_as_zero(self, rates):
        item = price_line_item(parcel(-3), rates)
        assert item.amount == 0
        assert item.weight == -3

    def test_rate_change_reprices(self, rates):
        items = reprice_items([parcel(55)], rates)
        cheaper = RateTable(slab1_rate=1, slab2_rate=1, slab3_rate=1, document_rate=1)
        assert reprice_items(items, cheaper)[0].amount == pytest.approx(55)


# =============================================================================
# MANIFEST TESTS
# =============================================================================

class TestBuildManifest:
    """Tests for manifest assembly."""

    def test_totals_recomputed(self, rates):
        m = build_manifest("m1", "MF-1", "05/03/2025", [parcel(7), parcel(55), document()],
                           rates, datetime(2025, 3, 5))
        assert m.total_amount == pytest.approx(21 + 120 + 5)
        assert m.item_count == 3

    def test_price_manifest_with_new_rates(self, rates):
        m = build_manifest("m1", "MF-1", "05/03/2025", [parcel(7)], rates, datetime(2025, 3, 5))
        flat = RateTable(slab1_rate=1, slab2_rate=1, slab3_rate=1, document_rate=1)
        repriced = price_manifest(m, flat)
        assert repriced.total_amount == pytest.approx(7)
        assert repriced.rates == flat
        assert repriced.id == "m1"
