from ..model.seasons import SolsticeType


def _split(seconds: int) -> tuple[int, int, int]:
  seconds = abs(seconds)
  return seconds // 3600, (seconds % 3600) // 60, seconds % 60


def format_daily_change(seconds: int) -> str:
  if seconds == 0:
    return "Same as yesterday"
  hours, minutes, secs = _split(seconds)
  minutes += hours * 60
  text = f"{minutes}m {secs}s" if minutes > 0 else f"{secs}s"
  sign = "+" if seconds > 0 else "-"
  return f"{sign}{text} today"


def format_cumulative_change(seconds: int, is_gaining: bool, solstice_type: SolsticeType) -> str:
  hours, minutes, secs = _split(seconds)
  if hours > 0:
    text = f"{hours}h {minutes}m {secs}s"
  elif minutes > 0:
    text = f"{minutes}m {secs}s"
  else:
    text = f"{secs}s"
  sign = "+" if is_gaining else "-"
  return f"{sign}{text} since {solstice_type.nominal_date}"


def format_time_change(seconds: int) -> str:
  """Compact form used by the widget summary."""
  hours, minutes, secs = _split(seconds)
  if hours > 0:
    return f"{hours}h {minutes}m"
  if minutes > 0:
    return f"{minutes}m {secs}s"
  return f"{secs}s"
