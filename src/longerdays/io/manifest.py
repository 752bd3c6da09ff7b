"""Manifest written beside an exported daylight table."""
from dataclasses import asdict
from pathlib import Path
from typing import List, Union
import hashlib
import json

from .schema import DaylightRow


def table_digest(rows: List[DaylightRow]) -> str:
  """Short digest of the (day, duration) series, stable across output formats."""
  h = hashlib.sha256()
  for r in rows:
    h.update(f"{r.day.isoformat()}:{r.daylight_seconds}\n".encode())
  return h.hexdigest()[:16]


def build_manifest(year: int, location: dict, rows: List[DaylightRow], stats, months) -> dict:
  return {
    "year": year,
    "location": location,
    "rows": len(rows),
    "digest": table_digest(rows),
    "stats": asdict(stats),
    "months": {m.month: m.daylight_seconds for m in months},
  }


def write_manifest(path: Union[str, Path], manifest: dict) -> dict:
  path = Path(path)
  path.parent.mkdir(parents=True, exist_ok=True)
  path.write_text(json.dumps(manifest, indent=2, default=str), encoding="utf-8")
  return manifest
