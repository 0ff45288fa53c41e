"""
Import Manifests
================

Imports exported manifest JSON files, or a whole folder archive, into the
store. Duplicate manifest numbers are skipped.

Modes:
    --zip FILE              Import a folder archive (creates the folder)
    --json FILE [FILE ...]  Import loose JSON files into --folder

Usage:
    python -m manifest_billing.scripts.import_manifests --store ./store --zip March.zip
    python -m manifest_billing.scripts.import_manifests --store ./store --json a.json b.json --folder March
    python -m manifest_billing.scripts.import_manifests --store ./store --zip March.zip --dry-run
"""

import argparse
import sys
from pathlib import Path

# Add root directory to path for imports
ROOT_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT_DIR))

from shared import storage
from manifest_billing.data import DEFAULT_RATES
from manifest_billing.editing import create_folder
from manifest_billing.loaders import import_folder_archive, import_records


STATUS_LABELS = {"success": "OK", "warning": "SKIP", "error": "FAIL"}


def print_results(results) -> None:
    for result in results:
        print(f"  [{STATUS_LABELS[result.status]:>4}] {result.file_name}: {result.message}")

    ok = sum(1 for r in results if r.status == "success")
    print(f"\n  {ok} of {len(results)} files imported")


# =============================================================================
# MODE HANDLERS
# =============================================================================

def run_zip_mode(path: Path, dry_run: bool) -> None:
    rates = storage.load_rates(DEFAULT_RATES)
    history = storage.load_manifests(rates, verbose=True)
    folders = storage.load_folders()

    print(f"Reading archive {path}...")
    folder, imported, results = import_folder_archive(path, history, rates)
    print_results(results)

    if folder is None:
        print("  Nothing imported, no folder created")
        return

    if dry_run:
        print(f"  [DRY RUN] Would create folder '{folder.name}' with {len(imported)} manifests")
        return

    storage.save_folders(folders + [folder])
    storage.save_manifests(imported + history, verbose=True)
    print(f"  Created folder '{folder.name}'")


def run_json_mode(paths: list[Path], folder_name: str, dry_run: bool) -> None:
    rates = storage.load_rates(DEFAULT_RATES)
    history = storage.load_manifests(rates, verbose=True)
    folders = storage.load_folders()

    folder = next((f for f in folders if f.name == folder_name), None)
    if folder is None:
        folder, folders = create_folder(folders, folder_name)
        print(f"  New folder '{folder_name}'")

    records = []
    for path in paths:
        try:
            records.append((path.name, path.read_text(encoding="utf-8")))
        except OSError as e:
            print(f"  [FAIL] {path.name}: {e}")

    imported, results = import_records(records, history, rates, folder_id=folder.id)
    print_results(results)

    if dry_run:
        print(f"  [DRY RUN] Would save {len(imported)} manifests into '{folder_name}'")
        return

    if imported:
        storage.save_folders(folders)
        storage.save_manifests(imported + history, verbose=True)


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(description="Import manifests into the store")
    parser.add_argument("--store", type=Path, required=True, help="Store directory")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--zip", type=Path, help="Folder archive to import")
    mode.add_argument("--json", type=Path, nargs="+", help="Manifest JSON files")
    parser.add_argument("--folder", help="Target folder for --json imports")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be imported")
    args = parser.parse_args()

    if args.json and not args.folder:
        parser.error("--json requires --folder")

    storage.configure_store(args.store)

    print("=" * 60)
    print("IMPORT MANIFESTS" + (" [DRY RUN]" if args.dry_run else ""))
    print("=" * 60)

    if args.zip:
        run_zip_mode(args.zip, args.dry_run)
    else:
        run_json_mode(args.json, args.folder, args.dry_run)


if __name__ == "__main__":
    main()
