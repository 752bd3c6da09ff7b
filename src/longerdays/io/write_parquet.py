import os
from typing import Iterable

import pyarrow as pa
import pyarrow.parquet as pq

from .schema import DaylightRow

DAYLIGHT_SCHEMA = pa.schema([
  ("day", pa.date32()),
  ("sunrise", pa.timestamp("us", tz="UTC")),
  ("sunset", pa.timestamp("us", tz="UTC")),
  ("daylight_seconds", pa.int64()),
  ("daily_change_seconds", pa.int64()),
  ("velocity_seconds", pa.int64()),
  ("season", pa.string()),
])


def write_daylight_parquet(rows_iter: Iterable[DaylightRow], path: str) -> int:
  os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
  rows = [r.model_dump() for r in rows_iter]
  if not rows:
    return 0
  table = pa.Table.from_pylist(rows, schema=DAYLIGHT_SCHEMA)
  pq.write_table(table, path, compression="snappy")
  return table.num_rows
