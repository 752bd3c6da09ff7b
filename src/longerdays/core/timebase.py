from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Tuple


@dataclass
class Timebase:
  year: int

  def days(self) -> Iterator[date]:
    d = date(self.year, 1, 1)
    while d.year == self.year:
      yield d
      d += timedelta(days=1)

  def mid_month_days(self) -> Iterator[date]:
    for month in range(1, 13):
      yield date(self.year, month, 15)


def walk_days(start: date, limit: int) -> Iterator[Tuple[int, date]]:
  """Lazy (offset, day) pairs after start, at most limit of them."""
  for offset in range(1, limit + 1):
    yield offset, start + timedelta(days=offset)


def day_span(start: date, end: date) -> Iterator[date]:
  """Every day from start through end inclusive."""
  d = start
  while d <= end:
    yield d
    d += timedelta(days=1)
