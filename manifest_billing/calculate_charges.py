"""
Courier Manifest Billing Calculator

Line items in, priced manifest out; manifests in, consolidated statement
out. Callers may build inputs from any source (editor, exported JSON,
document extraction output) as long as they go through the loaders first.

REQUIRED INPUT
--------------
    price_manifest() / build_manifest():
        - LineItem records (item_type, weight, is_manual_rate, rate)
        - RateTable: slab1_rate, slab2_rate, slab3_rate, document_rate

    build_statement():
        - Saved Manifest records (each with its own RateTable)
        - Optional {manifest_id: ConsolidatedOverride} corrections

OUTPUT
------
    price_line_item() sets rate, amount, breakdown on each line item.
    summarize() returns ManifestSummary (light/heavy split, slab weights).
    build_statement() returns ConsolidatedStatement (lines + totals), with
    slab weights re-derived from overridden values.

USAGE
-----
    from manifest_billing.calculate_charges import build_manifest, build_statement
    manifest = build_manifest(id, "MF-1", "05/03/2025", items, DEFAULT_RATES, now)
    statement = build_statement([manifest])
"""

from .models import ConsolidatedOverride, ConsolidatedStatement, Folder, Manifest
from .pricing import (
    billable_weight,
    price_parcel,
    price_line_item,
    reprice_items,
    build_manifest,
    price_manifest,
)
from .pipeline import (
    summarize,
    summarize_manifest,
    build_statement,
    heavy_detail_warnings,
    parse_heavy_detail,
)
from .editing import manifests_in_folders
from .data import DEFAULT_RATES, DEFAULT_TITLE, TITLE_SEPARATOR
from .version import VERSION


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def statement_for_folders(
    history: list[Manifest],
    folders: list[Folder],
    folder_ids,
    overrides: dict[str, ConsolidatedOverride] | None = None,
) -> ConsolidatedStatement:
    """
    Build the consolidated statement for one or more folders.

    Args:
        history: All saved manifests
        folders: All folders (used for the title)
        folder_ids: Folders to consolidate, in display order
        overrides: Sparse corrections keyed by manifest id

    Returns:
        ConsolidatedStatement titled with the folder names joined by " + ",
        or "Consolidated Report" when no selected folder is known
    """
    folder_ids = list(folder_ids)
    names = {f.id: f.name for f in folders}
    title = TITLE_SEPARATOR.join(names[fid] for fid in folder_ids if fid in names)

    manifests = manifests_in_folders(history, folder_ids)
    return build_statement(manifests, overrides, title=title or DEFAULT_TITLE)


__all__ = [
    "VERSION",
    "DEFAULT_RATES",
    "billable_weight",
    "price_parcel",
    "price_line_item",
    "reprice_items",
    "build_manifest",
    "price_manifest",
    "summarize",
    "summarize_manifest",
    "build_statement",
    "heavy_detail_warnings",
    "parse_heavy_detail",
    "statement_for_folders",
]
