"""
Export Folder
=============

Writes a folder and all its manifests to a ZIP archive that
import_manifests --zip can read back.

Usage:
    python -m manifest_billing.scripts.export_folder --store ./store --folder March --out March.zip
"""

import argparse
import sys
from pathlib import Path

# Add root directory to path for imports
ROOT_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT_DIR))

from shared import storage
from manifest_billing.data import DEFAULT_RATES
from manifest_billing.editing import manifests_in_folders
from manifest_billing.loaders import export_folder_archive


def main():
    parser = argparse.ArgumentParser(description="Export a folder as a ZIP archive")
    parser.add_argument("--store", type=Path, required=True, help="Store directory")
    parser.add_argument("--folder", required=True, help="Folder name")
    parser.add_argument("--out", type=Path, required=True, help="Output .zip file")
    args = parser.parse_args()

    storage.configure_store(args.store)

    rates = storage.load_rates(DEFAULT_RATES)
    history = storage.load_manifests(rates, verbose=True)
    folder = next((f for f in storage.load_folders() if f.name == args.folder), None)
    if folder is None:
        print(f"Unknown folder: {args.folder}")
        sys.exit(1)

    manifests = manifests_in_folders(history, [folder.id])
    try:
        path = export_folder_archive(folder, manifests, args.out)
    except ValueError as e:
        print(e)
        sys.exit(1)

    print(f"  Exported {len(manifests)} manifests from '{folder.name}' to {path}")


if __name__ == "__main__":
    main()
