"""
Export Writers

CSV through polars, JSON through the record shapes the import side reads.
Each writer returns the path it wrote to.
"""

import json
from dataclasses import asdict
from pathlib import Path

from ..models import ConsolidatedStatement, Manifest
from ..loaders.intake import manifest_to_record, rate_table_to_record
from ..version import VERSION
from .frames import manifest_frame, statement_frame


def write_manifest_csv(manifest: Manifest, path: str | Path) -> Path:
    path = Path(path)
    manifest_frame(manifest).write_csv(path)
    return path


def write_manifest_json(manifest: Manifest, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(manifest_to_record(manifest), indent=2), encoding="utf-8")
    return path


def write_statement_csv(statement: ConsolidatedStatement, path: str | Path) -> Path:
    path = Path(path)
    statement_frame(statement).write_csv(path)
    return path


def statement_to_record(statement: ConsolidatedStatement) -> dict:
    """JSON-ready statement: title, calculator version, lines (with rates) and totals."""
    lines = []
    for line in statement.lines:
        record = asdict(line)
        record["rates"] = rate_table_to_record(line.rates)
        record["heavy_weights"] = list(line.heavy_weights)
        lines.append(record)
    return {
        "title": statement.title,
        "calculator_version": VERSION,
        "lines": lines,
        "totals": asdict(statement.totals),
    }


def write_statement_json(statement: ConsolidatedStatement, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(statement_to_record(statement), indent=2), encoding="utf-8")
    return path
