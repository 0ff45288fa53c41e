"""
Manifest Editing

Pure functions behind the manifest editor and the folder tree. Every
operation returns new objects; line items are re-priced whenever a field
that affects price changes.
"""

import uuid
from dataclasses import replace
from datetime import datetime

from .models import Folder, ItemType, LineItem, Manifest, RateTable
from .pricing import build_manifest, price_line_item, reprice_items


# Fields a caller may not change through update_line_item()
_DERIVED_FIELDS = {"rate", "amount", "breakdown"}


# =============================================================================
# LINE ITEMS
# =============================================================================

def new_line_item(items, rates: RateTable, item_type: ItemType = ItemType.PARCEL) -> LineItem:
    """Blank priced line item numbered after the existing ones."""
    item = LineItem(
        id=str(uuid.uuid4()),
        sequence_number=len(items) + 1,
        item_type=item_type,
    )
    return price_line_item(item, rates)


def add_line_item(items, rates: RateTable, item_type: ItemType = ItemType.PARCEL) -> tuple[LineItem, ...]:
    return tuple(items) + (new_line_item(items, rates, item_type),)


def update_line_item(items, item_id: str, rates: RateTable, **changes) -> tuple[LineItem, ...]:
    """
    Change fields of one line item and re-price it.

    A manual rate is only honoured when is_manual_rate is set; otherwise a
    rate passed in changes is replaced by the derived one.

    Raises:
        ValueError: If a derived field (amount, breakdown) is passed
    """
    derived = set(changes) & (_DERIVED_FIELDS - {"rate"})
    if derived:
        raise ValueError(f"Derived fields cannot be edited: {sorted(derived)}")

    updated = []
    for item in items:
        if item.id == item_id:
            item = price_line_item(replace(item, **changes), rates)
        updated.append(item)
    return tuple(updated)


def delete_line_item(items, item_id: str) -> tuple[LineItem, ...]:
    """Remove a line item and renumber the rest 1..n."""
    remaining = [item for item in items if item.id != item_id]
    return resequence(remaining)


def resequence(items) -> tuple[LineItem, ...]:
    return tuple(replace(item, sequence_number=i + 1) for i, item in enumerate(items))


def apply_item_type(items, item_type: ItemType, rates: RateTable) -> tuple[LineItem, ...]:
    """Set every line item to one type and re-price."""
    return reprice_items([replace(item, item_type=item_type) for item in items], rates)


# =============================================================================
# MANIFESTS
# =============================================================================

def save_manifest(
    history: list[Manifest],
    manifest_id: str | None,
    manifest_number: str,
    manifest_date: str,
    items,
    rates: RateTable,
    folder_id: str | None = None,
    now: datetime | None = None,
) -> tuple[Manifest, list[Manifest]]:
    """
    Save editor state into history.

    An existing manifest with the same id is replaced in place (keeping its
    created_at); otherwise the manifest is new and goes to the front.
    Totals are recomputed from the items.

    Returns:
        (saved manifest, new history)
    """
    now = now or datetime.now()
    previous = next((m for m in history if manifest_id and m.id == manifest_id), None)

    manifest = build_manifest(
        manifest_id=previous.id if previous else (manifest_id or str(uuid.uuid4())),
        manifest_number=manifest_number or f"MF-{int(now.timestamp() * 1000)}",
        manifest_date=manifest_date,
        items=items,
        rates=rates,
        created_at=previous.created_at if previous else now,
        folder_id=folder_id,
    )

    if previous:
        return manifest, [manifest if m.id == previous.id else m for m in history]
    return manifest, [manifest] + list(history)


def delete_manifest(history: list[Manifest], manifest_id: str) -> list[Manifest]:
    return [m for m in history if m.id != manifest_id]


def move_manifest(history: list[Manifest], manifest_id: str, folder_id: str | None) -> list[Manifest]:
    """Move a manifest into a folder (None = root)."""
    return [replace(m, folder_id=folder_id) if m.id == manifest_id else m for m in history]


# =============================================================================
# FOLDERS
# =============================================================================

def create_folder(folders: list[Folder], name: str, now: datetime | None = None) -> tuple[Folder, list[Folder]]:
    """
    Raises:
        ValueError: If name is blank
    """
    name = name.strip()
    if not name:
        raise ValueError("Folder name cannot be empty")
    folder = Folder(id=str(uuid.uuid4()), name=name, created_at=now or datetime.now())
    return folder, list(folders) + [folder]


def rename_folder(folders: list[Folder], folder_id: str, name: str) -> list[Folder]:
    name = name.strip()
    if not name:
        raise ValueError("Folder name cannot be empty")
    return [replace(f, name=name) if f.id == folder_id else f for f in folders]


def delete_folder(
    folders: list[Folder],
    history: list[Manifest],
    folder_id: str,
) -> tuple[list[Folder], list[Manifest]]:
    """Delete a folder. Its manifests move to the root, they are not deleted."""
    remaining = [f for f in folders if f.id != folder_id]
    moved = [replace(m, folder_id=None) if m.folder_id == folder_id else m for m in history]
    return remaining, moved


def manifests_in_folders(history: list[Manifest], folder_ids) -> list[Manifest]:
    """Manifests belonging to any of the given folders, in history order."""
    wanted = set(folder_ids)
    return [m for m in history if m.folder_id in wanted]
