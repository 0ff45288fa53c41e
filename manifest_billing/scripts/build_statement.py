"""
Build Consolidated Statement
============================

Consolidates every manifest in one or more folders into a statement and
prints it. Optionally writes CSV / JSON.

Overrides file (JSON), keyed by manifest number:
    {
        "MF-1001": {"heavy_detail": "20+30", "document_count": 2},
        "MF-1002": {"date": "01/03/2025"}
    }

Usage:
    python -m manifest_billing.scripts.build_statement --store ./store --folder March
    python -m manifest_billing.scripts.build_statement --store ./store --folder March --folder April
    python -m manifest_billing.scripts.build_statement --store ./store --folder March \\
        --overrides overrides.json --csv statement.csv --json statement.json
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

# Add root directory to path for imports
ROOT_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT_DIR))

from shared import storage
from manifest_billing.calculate_charges import (
    DEFAULT_RATES,
    heavy_detail_warnings,
    statement_for_folders,
)
from manifest_billing.models import ConsolidatedOverride, Manifest
from manifest_billing.loaders import OVERRIDE_KEYS, override_from_record
from manifest_billing.export import (
    statement_frame,
    page_subtotals,
    write_statement_csv,
    write_statement_json,
)
from manifest_billing.formatting import format_rupees


# =============================================================================
# OVERRIDES
# =============================================================================

def load_overrides(path: Path, manifests: list[Manifest]) -> dict[str, ConsolidatedOverride]:
    """
    Read an overrides file and key it by manifest id.

    Unknown manifest numbers, unknown fields and entries that fail
    validation are reported and skipped.

    Raises:
        ValueError: If the file is not JSON or not an object
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must hold a JSON object keyed by manifest number")
    by_number = {m.manifest_number: m.id for m in manifests}

    overrides = {}
    for number, values in raw.items():
        if number not in by_number:
            print(f"  Skipping override for unknown manifest {number}")
            continue
        if not isinstance(values, dict):
            print(f"  Skipping override for {number}: expected an object, got {type(values).__name__}")
            continue
        unknown = set(values) - OVERRIDE_KEYS
        if unknown:
            print(f"  Ignoring unknown override fields for {number}: {sorted(unknown)}")
        try:
            overrides[by_number[number]] = override_from_record(values)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            print(f"  Skipping invalid override for {number}: {problems}")

    return overrides


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(description="Build a consolidated statement")
    parser.add_argument("--store", type=Path, required=True, help="Store directory")
    parser.add_argument("--folder", action="append", required=True,
                        help="Folder name (repeat for several folders)")
    parser.add_argument("--overrides", type=Path, help="Overrides JSON file")
    parser.add_argument("--csv", type=Path, help="Write statement CSV")
    parser.add_argument("--json", type=Path, help="Write statement JSON")
    args = parser.parse_args()

    storage.configure_store(args.store)

    print("=" * 60)
    print("CONSOLIDATED STATEMENT")
    print("=" * 60)

    rates = storage.load_rates(DEFAULT_RATES)
    history = storage.load_manifests(rates, verbose=True)
    folders = storage.load_folders()

    by_name = {f.name: f.id for f in folders}
    missing = [name for name in args.folder if name not in by_name]
    if missing:
        print(f"Unknown folder(s): {', '.join(missing)}")
        print(f"Available: {', '.join(sorted(by_name)) or '(none)'}")
        sys.exit(1)

    folder_ids = [by_name[name] for name in args.folder]
    overrides = {}
    if args.overrides:
        try:
            overrides = load_overrides(args.overrides, history)
        except (OSError, ValueError) as e:
            print(f"Could not read overrides: {e}")
            sys.exit(1)
        print(f"  Loaded {len(overrides)} overrides")

    statement = statement_for_folders(history, folders, folder_ids, overrides)

    print(f"\n{statement.title}")
    print("-" * 60)
    print(statement_frame(statement).select(
        "#", "Date", "Manifest No", "Small Parcels (p)", "Big Parcels (P)",
        "Docs (D)", "Total Wt", "Net Amount",
    ))

    for i, subtotal in enumerate(page_subtotals(statement), start=1):
        print(f"  Page {i} subtotal: {format_rupees(subtotal)}")
    print(f"  Grand total: {format_rupees(statement.totals.grand_total)}")

    for number in heavy_detail_warnings(statement):
        print(f"  WARNING: unparseable heavy detail tokens dropped for {number}")

    if args.csv:
        write_statement_csv(statement, args.csv)
        print(f"  Saved CSV to {args.csv}")
    if args.json:
        write_statement_json(statement, args.json)
        print(f"  Saved JSON to {args.json}")


if __name__ == "__main__":
    main()
