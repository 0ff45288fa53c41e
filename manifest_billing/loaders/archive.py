"""
Folder Archives

A folder travels as a ZIP file:

    folder_info.json       folderName, createdDate, createdTime,
                           totalManifests, version
    <manifest_no>.json     one file per manifest (manifest_to_record shape)

Manifest numbers are made filename-safe: lowercased, anything outside
[a-z0-9] replaced with "_".
"""

import json
import re
import uuid
import zipfile
from datetime import datetime
from pathlib import Path

from ..models import Folder, Manifest, RateTable
from ..data.reference.statement import DATE_FORMAT
from .intake import manifest_to_record
from .imports import ImportResult, import_records


FOLDER_INFO = "folder_info.json"
ARCHIVE_VERSION = "2.0"


def safe_file_name(manifest_number: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", manifest_number.lower())


def export_folder_archive(
    folder: Folder,
    manifests: list[Manifest],
    path: str | Path,
    now: datetime | None = None,
) -> Path:
    """
    Write a folder and its manifests to a ZIP archive.

    Raises:
        ValueError: If the folder holds no manifests
    """
    if not manifests:
        raise ValueError(f"Folder '{folder.name}' has no manifests to export")

    now = now or datetime.now()
    path = Path(path)
    info = {
        "folderName": folder.name,
        "createdDate": now.strftime(DATE_FORMAT),
        "createdTime": now.strftime("%H:%M:%S"),
        "totalManifests": len(manifests),
        "version": ARCHIVE_VERSION,
    }

    used = set()
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(FOLDER_INFO, json.dumps(info, indent=2))
        for manifest in manifests:
            name = safe_file_name(manifest.manifest_number)
            # Same-number manifests must not overwrite each other
            candidate = name
            n = 2
            while candidate in used:
                candidate = f"{name}_{n}"
                n += 1
            used.add(candidate)
            zf.writestr(f"{candidate}.json", json.dumps(manifest_to_record(manifest), indent=2))

    return path


def import_folder_archive(
    path: str | Path,
    history: list[Manifest],
    default_rates: RateTable,
    now: datetime | None = None,
) -> tuple[Folder | None, list[Manifest], list[ImportResult]]:
    """
    Read a folder archive.

    The folder is named from folder_info.json, or after the archive file
    when that is missing or unreadable. A folder is only created when at
    least one manifest was imported. A member that is not valid UTF-8 JSON
    is reported as an error result and the rest are still imported.

    Returns:
        (new folder or None, imported manifests, per-file results)

    Raises:
        zipfile.BadZipFile: If path is not a ZIP archive
    """
    now = now or datetime.now()
    path = Path(path)
    folder_id = str(uuid.uuid4())

    with zipfile.ZipFile(path) as zf:
        names = sorted(n for n in zf.namelist() if n.lower().endswith(".json"))
        folder_name = path.stem
        if FOLDER_INFO in names:
            folder_name = _folder_name(zf.read(FOLDER_INFO)) or folder_name
        # Decoded per record by import_records, so one bad file is one error
        records = [(name, zf.read(name)) for name in names if name != FOLDER_INFO]

    imported, results = import_records(records, history, default_rates, folder_id=folder_id, now=now)

    if not imported:
        return None, [], results

    folder = Folder(id=folder_id, name=folder_name, created_at=now)
    return folder, imported, results


def _folder_name(raw: bytes) -> str | None:
    """folderName from folder_info.json, or None if it cannot be read."""
    try:
        info = json.loads(raw.decode("utf-8"))
    except ValueError:
        return None
    if not isinstance(info, dict):
        return None
    name = info.get("folderName")
    if not isinstance(name, str) or not name.strip():
        return None
    return name.strip()
