"""
Unit Tests for Manifest Editing and Folders
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from datetime import datetime

import pytest

from manifest_billing.editing import (
    add_line_item,
    apply_item_type,
    create_folder,
    delete_folder,
    delete_line_item,
    delete_manifest,
    manifests_in_folders,
    move_manifest,
    new_line_item,
    rename_folder,
    save_manifest,
    update_line_item,
)
from manifest_billing.models import ItemType, RateTable


RATES = RateTable(slab1_rate=3, slab2_rate=2, slab3_rate=1, document_rate=5)
NOW = datetime(2025, 3, 5)


@pytest.fixture
def items():
    """Three blank parcels, weights set to 7, 55 and 120."""
    rows = ()
    for _ in range(3):
        rows = add_line_item(rows, RATES)
    for item, weight in zip(rows, (7, 55, 120)):
        rows = update_line_item(rows, item.id, RATES, weight=weight)
    return rows


# =============================================================================
# LINE ITEM TESTS
# =============================================================================

class TestLineItems:
    """Tests for line item add / update / delete."""

    def test_new_line_item(self):
        item = new_line_item((), RATES)
        assert item.sequence_number == 1
        assert item.item_type == ItemType.PARCEL
        assert item.amount == 0

    def test_update_reprices(self, items):
        assert [i.amount for i in items] == pytest.approx([21, 120, 230])

    def test_toggle_manual_rate(self, items):
        target = items[1].id
        manual = update_line_item(items, target, RATES, is_manual_rate=True, rate=50)
        assert manual[1].amount == pytest.approx(50)
        back = update_line_item(manual, target, RATES, is_manual_rate=False)
        assert back[1].amount == pytest.approx(120)

    def test_derived_fields_rejected(self, items):
        with pytest.raises(ValueError):
            update_line_item(items, items[0].id, RATES, amount=1)

    def test_delete_resequences(self, items):
        remaining = delete_line_item(items, items[0].id)
        assert [i.sequence_number for i in remaining] == [1, 2]
        assert [i.weight for i in remaining] == [55, 120]

    def test_apply_item_type(self, items):
        docs = apply_item_type(items, ItemType.DOCUMENT, RATES)
        assert [i.amount for i in docs] == [5, 5, 5]
        assert [i.weight for i in docs] == [7, 55, 120]


# =============================================================================
# MANIFEST TESTS
# =============================================================================

class TestSaveManifest:
    """Tests for saving and history management."""

    def test_new_manifest_prepended(self, items):
        first, history = save_manifest([], None, "MF-1", "05/03/2025", items, RATES, now=NOW)
        second, history = save_manifest(history, None, "MF-2", "06/03/2025", items[:1], RATES, now=NOW)
        assert [m.manifest_number for m in history] == ["MF-2", "MF-1"]
        assert first.total_amount == pytest.approx(21 + 120 + 230)
        assert first.item_count == 3

    def test_save_replaces_by_id(self, items):
        saved, history = save_manifest([], None, "MF-1", "05/03/2025", items, RATES, now=NOW)
        edited, history = save_manifest(history, saved.id, "MF-1", "05/03/2025", items[:2], RATES,
                                        now=datetime(2025, 4, 1))
        assert len(history) == 1
        assert edited.id == saved.id
        assert edited.created_at == NOW
        assert edited.total_amount == pytest.approx(141)

    def test_generated_number(self, items):
        saved, _ = save_manifest([], None, "", "05/03/2025", items, RATES, now=NOW)
        assert saved.manifest_number.startswith("MF-")

    def test_delete_and_move(self, items):
        a, history = save_manifest([], None, "MF-1", "05/03/2025", items, RATES, now=NOW)
        b, history = save_manifest(history, None, "MF-2", "05/03/2025", items, RATES, now=NOW)
        history = move_manifest(history, a.id, "f1")
        assert manifests_in_folders(history, ["f1"]) == [history[1]]
        assert [m.id for m in delete_manifest(history, a.id)] == [b.id]


# =============================================================================
# FOLDER TESTS
# =============================================================================

class TestFolders:
    """Tests for folder create / rename / delete."""

    def test_create_and_rename(self):
        folder, folders = create_folder([], "  March ", now=NOW)
        assert folder.name == "March"
        renamed = rename_folder(folders, folder.id, "April")
        assert renamed[0].name == "April"

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            create_folder([], "   ")

    def test_delete_moves_manifests_to_root(self, items):
        folder, folders = create_folder([], "March", now=NOW)
        m, history = save_manifest([], None, "MF-1", "05/03/2025", items, RATES, folder_id=folder.id, now=NOW)
        folders, history = delete_folder(folders, history, folder.id)
        assert folders == []
        assert len(history) == 1
        assert history[0].folder_id is None

    def test_manifests_in_several_folders(self, items):
        _, history = save_manifest([], None, "MF-1", "d", items, RATES, folder_id="a", now=NOW)
        _, history = save_manifest(history, None, "MF-2", "d", items, RATES, folder_id="b", now=NOW)
        _, history = save_manifest(history, None, "MF-3", "d", items, RATES, folder_id="c", now=NOW)
        found = manifests_in_folders(history, ["a", "c"])
        assert [m.manifest_number for m in found] == ["MF-3", "MF-1"]
