from pathlib import Path
from typing import Iterable, Union

from .schema import DaylightRow


def write_daylight_jsonl(rows: Iterable[DaylightRow], path: Union[str, Path]) -> int:
  """One JSON object per day; days without a sunrise carry nulls."""
  path = Path(path)
  path.parent.mkdir(parents=True, exist_ok=True)
  count = 0
  with path.open("w", encoding="utf-8") as f:
    for row in rows:
      f.write(row.model_dump_json())
      f.write("\n")
      count += 1
  return count
