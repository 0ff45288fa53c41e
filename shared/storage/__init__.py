"""
JSON Store

Key-value persistence for billing history. Each key is one JSON file in
the store directory:

    manifests.json       list of manifest records (newest first)
    folders.json         list of folder records
    global_config.json   default rate table for new manifests

Shared by the command-line tools and the dashboard.
"""

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from manifest_billing.models import Folder, Manifest, RateTable
from manifest_billing.loaders.intake import (
    manifest_from_record,
    manifest_to_record,
    rate_table_from_record,
    rate_table_to_record,
)


# Store keys
MANIFESTS_KEY = "manifests"
FOLDERS_KEY = "folders"
CONFIG_KEY = "global_config"

DEFAULT_STORE_DIR = Path.home() / ".manifest_billing"


# Global store directory
_store_dir: Optional[Path] = None


# ============================================================================
# STORE LOCATION
# ============================================================================

def configure_store(path: str | Path) -> Path:
    """
    Point the store at a directory, creating it if needed.

    Raises:
        RuntimeError: If the directory cannot be created
    """
    global _store_dir

    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RuntimeError(f"Failed to create store directory {path}: {e}")

    _store_dir = path
    return _store_dir


def get_store_dir() -> Path:
    """
    Current store directory.

    Falls back to $MANIFEST_BILLING_STORE, then ~/.manifest_billing.
    """
    if _store_dir is not None:
        return _store_dir
    return configure_store(os.environ.get("MANIFEST_BILLING_STORE", DEFAULT_STORE_DIR))


def reset_store() -> None:
    """Forget the configured directory."""
    global _store_dir
    _store_dir = None


# ============================================================================
# KEY-VALUE OPERATIONS
# ============================================================================

def read_key(key: str, default: Any = None) -> Any:
    """
    Read a key's JSON value. Missing keys return default.

    Raises:
        RuntimeError: If the file exists but cannot be read or parsed
    """
    path = get_store_dir() / f"{key}.json"
    if not path.exists():
        return default

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Error reading {key} from store: {e}")


def write_key(key: str, value: Any) -> None:
    """
    Write a key's JSON value atomically (temp file + rename).

    Raises:
        RuntimeError: If the value cannot be written
    """
    store_dir = get_store_dir()
    path = store_dir / f"{key}.json"

    tmp = None
    try:
        fd, tmp = tempfile.mkstemp(dir=store_dir, suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(value, f, indent=2)
        os.replace(tmp, path)
    except (OSError, TypeError, ValueError) as e:
        if tmp is not None and os.path.exists(tmp):
            os.remove(tmp)
        raise RuntimeError(f"Error writing {key} to store: {e}")


# ============================================================================
# BILLING DATA
# ============================================================================

def load_rates(fallback: RateTable) -> RateTable:
    """Global default rates, or fallback when none were saved."""
    return rate_table_from_record(read_key(CONFIG_KEY), fallback)


def save_rates(rates: RateTable) -> None:
    write_key(CONFIG_KEY, rate_table_to_record(rates))


def load_manifests(default_rates: RateTable, verbose: bool = False) -> list[Manifest]:
    """
    Load manifest history. Every manifest is re-priced with its own rates.

    Raises:
        RuntimeError: If the store is unreadable or a record is malformed
    """
    records = read_key(MANIFESTS_KEY, default=[])
    manifests = []
    for i, record in enumerate(records):
        try:
            manifests.append(manifest_from_record(record, default_rates, keep_id=True))
        except ValueError as e:
            raise RuntimeError(f"Malformed manifest record #{i + 1} in store: {e}")

    if verbose:
        print(f"  Loaded {len(manifests):,} manifests from {get_store_dir()}")
    return manifests


def save_manifests(manifests: list[Manifest], verbose: bool = False) -> None:
    write_key(MANIFESTS_KEY, [manifest_to_record(m) for m in manifests])
    if verbose:
        print(f"  Saved {len(manifests):,} manifests to {get_store_dir()}")


def load_folders() -> list[Folder]:
    records = read_key(FOLDERS_KEY, default=[])
    try:
        return [
            Folder(
                id=r["id"],
                name=r["name"],
                created_at=datetime.fromtimestamp(r.get("createdAt", 0) / 1000),
            )
            for r in records
        ]
    except (KeyError, TypeError) as e:
        raise RuntimeError(f"Malformed folder record in store: {e}")


def save_folders(folders: list[Folder]) -> None:
    write_key(FOLDERS_KEY, [
        {"id": f.id, "name": f.name, "createdAt": int(f.created_at.timestamp() * 1000)}
        for f in folders
    ])
