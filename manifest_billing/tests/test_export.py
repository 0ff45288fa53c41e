"""
Unit Tests for Exports, Storage and Dashboard Helpers
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import json
from datetime import datetime

import polars as pl
import pytest

from manifest_billing.calculate_charges import build_manifest, build_statement, statement_for_folders
from manifest_billing.data import DEFAULT_RATES
from manifest_billing.models import ConsolidatedOverride, Folder, ItemType, LineItem, RateTable
from manifest_billing.export import (
    MANIFEST_COLUMNS,
    STATEMENT_COLUMNS,
    amount_logic,
    heavy_detail_text,
    manifest_frame,
    page_subtotals,
    statement_frame,
    write_manifest_csv,
    write_manifest_json,
    write_statement_csv,
    write_statement_json,
)
from manifest_billing.formatting import format_number, format_rupees
from manifest_billing.version import VERSION
from shared import storage


# =============================================================================
# FIXTURES
# =============================================================================

NOW = datetime(2025, 3, 5, 9, 0)


def make_manifest(manifest_id, weights, documents=0, date="05/03/2025", folder_id=None):
    items = [LineItem(id=f"{manifest_id}-{i}", sequence_number=i + 1, reference_code=f"AWB{i}", weight=w)
             for i, w in enumerate(weights)]
    items += [LineItem(id=f"{manifest_id}-d{i}", sequence_number=len(items) + i + 1, item_type=ItemType.DOCUMENT)
              for i in range(documents)]
    return build_manifest(manifest_id, f"MF-{manifest_id}", date, items, DEFAULT_RATES, NOW, folder_id)


@pytest.fixture
def manifest():
    """8kg + 55kg parcels and one document: 18kg S1, 45kg S2, 1 doc."""
    return make_manifest("a", [8, 55], documents=1)


@pytest.fixture
def statement(manifest):
    return build_statement([manifest, make_manifest("b", [120])])


@pytest.fixture
def store(tmp_path):
    storage.configure_store(tmp_path / "store")
    yield tmp_path / "store"
    storage.reset_store()


# =============================================================================
# FORMATTING TESTS
# =============================================================================

class TestFormatting:

    def test_format_number(self):
        assert format_number(30.0) == "30"
        assert format_number(12.5) == "12.5"
        assert format_number(1 / 3) == "0.33"

    def test_format_rupees(self):
        assert format_rupees(1234567) == "Rs.1,234,567"
        assert format_rupees(12.5) == "Rs.12.50"


# =============================================================================
# FRAME TESTS
# =============================================================================

class TestFrames:
    """Tests for manifest and statement frames."""

    def test_manifest_frame(self, manifest):
        df = manifest_frame(manifest)
        assert df.columns == MANIFEST_COLUMNS
        assert df["Amount"].to_list() == pytest.approx([24, 120, 5])
        assert df["Type"].to_list() == ["Parcel", "Parcel", "Document"]

    def test_amount_logic(self, manifest):
        line = build_statement([manifest]).lines[0]
        assert amount_logic(line) == "S1:(18kg@3=54) S2:(45kg@2=90) S3:(0kg@1=0) Doc:(1*5=5)"

    def test_heavy_detail_text(self, manifest):
        line = build_statement([manifest], {"a": ConsolidatedOverride(heavy_detail="20+30")}).lines[0]
        assert heavy_detail_text(line) == "20+30=50"
        no_heavy = build_statement([make_manifest("c", [3])]).lines[0]
        assert heavy_detail_text(no_heavy) == "0"

    def test_statement_frame_totals_row(self, statement):
        df = statement_frame(statement)
        assert df.columns == STATEMENT_COLUMNS
        assert df.height == len(statement.lines) + 1
        totals = df.row(df.height - 1, named=True)
        assert totals["#"] == "TOTALS"
        assert totals["Net Amount"] == pytest.approx(statement.totals.grand_total)
        assert totals["Big Parcels (P)"] == 2

    def test_statement_frame_without_totals(self, statement):
        assert statement_frame(statement, include_totals=False).height == 2

    def test_page_subtotals(self):
        manifests = [make_manifest(str(i), [7]) for i in range(13)]
        statement = build_statement(manifests)
        assert page_subtotals(statement) == pytest.approx([12 * 21, 21])
        assert page_subtotals(statement, rows_per_page=5) == pytest.approx([105, 105, 63])

    def test_page_subtotals_rejects_zero(self, statement):
        with pytest.raises(ValueError):
            page_subtotals(statement, rows_per_page=0)


# =============================================================================
# WRITER TESTS
# =============================================================================

class TestWriters:
    """Tests for CSV / JSON writers."""

    def test_manifest_files(self, manifest, tmp_path):
        csv_path = write_manifest_csv(manifest, tmp_path / "m.csv")
        assert pl.read_csv(csv_path).columns == MANIFEST_COLUMNS
        record = json.loads(write_manifest_json(manifest, tmp_path / "m.json").read_text())
        assert record["manifestNo"] == "MF-a"
        assert len(record["rows"]) == 3
        assert record["calculatorVersion"] == VERSION

    def test_statement_files(self, statement, tmp_path):
        df = pl.read_csv(write_statement_csv(statement, tmp_path / "s.csv"))
        assert df.columns == STATEMENT_COLUMNS
        record = json.loads(write_statement_json(statement, tmp_path / "s.json").read_text())
        assert record["title"] == "Consolidated Report"
        assert record["calculator_version"] == VERSION
        assert record["totals"]["grand_total"] == pytest.approx(statement.totals.grand_total)
        assert record["lines"][0]["rates"]["parcelSlab1Rate"] == 3


# =============================================================================
# STORAGE TESTS
# =============================================================================

class TestStorage:
    """Tests for the JSON store."""

    def test_empty_store(self, store):
        assert storage.load_manifests(DEFAULT_RATES) == []
        assert storage.load_folders() == []
        assert storage.load_rates(DEFAULT_RATES) == DEFAULT_RATES

    def test_round_trip(self, store, manifest):
        storage.save_manifests([manifest])
        loaded = storage.load_manifests(DEFAULT_RATES)
        assert loaded[0].id == manifest.id
        assert loaded[0].items == manifest.items
        assert loaded[0].total_amount == pytest.approx(manifest.total_amount)

    def test_rates_and_folders(self, store):
        rates = RateTable(slab1_rate=4, slab2_rate=3, slab3_rate=2, document_rate=10)
        storage.save_rates(rates)
        assert storage.load_rates(DEFAULT_RATES) == rates

        folder = Folder(id="f1", name="March", created_at=datetime(2025, 3, 1))
        storage.save_folders([folder])
        assert storage.load_folders() == [folder]

    def test_failed_write_leaves_no_temp_file(self, store):
        storage.write_key("rates", {"a": 1})
        with pytest.raises(RuntimeError):
            storage.write_key("rates", {"a": object()})
        assert list(store.glob("*.tmp")) == []
        assert storage.read_key("rates") == {"a": 1}

    def test_corrupt_file_raises(self, store):
        (store / "manifests.json").write_text("{broken")
        with pytest.raises(RuntimeError):
            storage.load_manifests(DEFAULT_RATES)


# =============================================================================
# DASHBOARD HELPER TESTS
# =============================================================================

class TestStatementForFolders:
    """Tests for folder selection and titles."""

    @pytest.fixture
    def setup(self):
        folders = [
            Folder(id="f1", name="March", created_at=NOW),
            Folder(id="f2", name="April", created_at=NOW),
        ]
        history = [
            make_manifest("a", [8], folder_id="f1"),
            make_manifest("b", [55], folder_id="f2"),
            make_manifest("c", [3]),
        ]
        return history, folders

    def test_single_folder(self, setup):
        history, folders = setup
        statement = statement_for_folders(history, folders, ["f1"])
        assert statement.title == "March"
        assert [l.manifest_id for l in statement.lines] == ["a"]

    def test_joined_title(self, setup):
        history, folders = setup
        statement = statement_for_folders(history, folders, ["f1", "f2"])
        assert statement.title == "March + April"
        assert statement.totals.grand_total == pytest.approx(24 + 120)

    def test_unknown_folder_default_title(self, setup):
        history, folders = setup
        statement = statement_for_folders(history, folders, ["zzz"])
        assert statement.title == "Consolidated Report"
        assert statement.lines == ()

    def test_tier_chart(self, setup):
        from manifest_billing.dashboard.data import tier_chart
        history, folders = setup
        fig = tier_chart(statement_for_folders(history, folders, ["f1", "f2"]))
        assert [trace.name for trace in fig.data] == ["S1", "S2", "S3", "Doc"]
