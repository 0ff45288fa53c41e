"""
Manifest Import

Brings exported manifest JSON back into history.

HOW DUPLICATES ARE HANDLED
--------------------------
Manifest numbers identify a manifest across exports. During a batch import
a record whose number already exists in history, or appeared earlier in the
same batch, is skipped and reported as a warning. Records that fail
structural validation are reported as errors. Nothing in a batch raises.

When a single manifest is saved interactively, find_conflict() detects the
clash and resolve_conflict() applies the user's choice:

    keep_both  - keep the existing manifest and add the new one
    override   - replace the existing manifest in place (its id is kept)
    discard    - drop the new one
"""

import json
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Literal

from pydantic import ValidationError

from ..models import Manifest, RateTable
from .intake import manifest_from_record


ImportStatus = Literal["success", "warning", "error"]
ConflictAction = Literal["keep_both", "override", "discard"]

CONFLICT_ACTIONS = ("keep_both", "override", "discard")


@dataclass(frozen=True)
class ImportResult:
    file_name: str
    status: ImportStatus
    message: str


# =============================================================================
# BATCH IMPORT
# =============================================================================

def import_records(
    records: Iterable[tuple[str, dict | str | bytes]],
    existing: list[Manifest],
    default_rates: RateTable,
    folder_id: str | None = None,
    now: datetime | None = None,
) -> tuple[list[Manifest], list[ImportResult]]:
    """
    Import a batch of manifest records.

    Args:
        records: (file name, record) pairs; a record may be a parsed dict,
            the raw JSON text or the raw UTF-8 bytes
        existing: Manifest history, used for duplicate detection
        default_rates: Used for records that carry no config
        folder_id: Folder the imported manifests are placed in
        now: Clock for generated numbers and timestamps

    Returns:
        (new manifests in batch order, one ImportResult per record)
    """
    seen = {m.manifest_number for m in existing}
    imported = []
    results = []

    for file_name, record in records:
        try:
            if isinstance(record, bytes):
                record = record.decode("utf-8")
            if isinstance(record, str):
                record = json.loads(record)
            if not isinstance(record, dict):
                raise ValueError("expected a JSON object")
            manifest = manifest_from_record(record, default_rates, folder_id=folder_id, now=now)
        except (ValidationError, ValueError) as e:
            results.append(ImportResult(file_name, "error", f"Invalid manifest structure: {_first_line(e)}"))
            continue

        if manifest.manifest_number in seen:
            results.append(ImportResult(
                file_name, "warning",
                f"Duplicate manifest {manifest.manifest_number} skipped",
            ))
            continue

        seen.add(manifest.manifest_number)
        imported.append(manifest)
        results.append(ImportResult(
            file_name, "success",
            f"Imported {manifest.manifest_number} ({manifest.item_count} items)",
        ))

    return imported, results


def _first_line(error: Exception) -> str:
    return str(error).splitlines()[0] if str(error) else type(error).__name__


# =============================================================================
# SINGLE MANIFEST CONFLICTS
# =============================================================================

def find_conflict(candidate: Manifest, history: list[Manifest]) -> Manifest | None:
    """Existing manifest (other than the candidate itself) with the same number."""
    for manifest in history:
        if manifest.id != candidate.id and manifest.manifest_number == candidate.manifest_number:
            return manifest
    return None


def resolve_conflict(
    action: ConflictAction,
    existing: Manifest,
    candidate: Manifest,
    history: list[Manifest],
) -> list[Manifest]:
    """
    Apply a conflict resolution and return the new history.

    Raises:
        ValueError: If action is not one of keep_both, override, discard
    """
    if action == "keep_both":
        return [candidate] + list(history)

    if action == "override":
        replacement = replace(candidate, id=existing.id, created_at=existing.created_at)
        return [replacement if m.id == existing.id else m for m in history]

    if action == "discard":
        return list(history)

    raise ValueError(f"Unknown conflict action: {action!r}. Expected one of {CONFLICT_ACTIONS}")
