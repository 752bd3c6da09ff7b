from datetime import date, datetime
import logging

import click

from ..core.formatting import format_cumulative_change, format_daily_change
from ..errors import OutOfBoundsInputError
from ..model.config import load_config
from ..model.geo import GeoCoordinate
from ..service import LongerDays


def _coordinate(cfg, lat, lon):
  if lat is None and lon is None:
    return None
  if lat is None or lon is None:
    raise click.UsageError("--lat and --lon must be given together")
  return GeoCoordinate(lat, lon, cfg.location.name if cfg.location else None)


@click.command()
@click.option("--config", type=click.Path(exists=True), help="YAML config overriding the defaults")
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), help="Day to report (default: today)")
@click.option("--lat", type=float, help="Latitude override")
@click.option("--lon", type=float, help="Longitude override")
@click.option("--history", default=7, show_default=True, help="Days of recent history to show")
@click.option("--verbose", is_flag=True, help="Debug logging")
def main(config, day, lat, lon, history, verbose):
  logging.basicConfig(
    level=logging.DEBUG if verbose else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
  )
  try:
    cfg = load_config(config)
  except ValueError as e:
    raise click.UsageError(str(e))
  try:
    ld = LongerDays(cfg, coordinate=_coordinate(cfg, lat, lon))
  except OutOfBoundsInputError as e:
    raise click.BadParameter(str(e))
  d: date = day.date() if day else datetime.now(ld.tz).date()
  r = ld.report(d)

  click.echo(f"Daylight for {d.isoformat()} at ({ld.coordinate.latitude:.4f}, {ld.coordinate.longitude:.4f})")
  if r.snapshot is None:
    click.echo("  The sun does not rise and set today.")
  else:
    s = r.snapshot
    click.echo(f"  Sunrise   {s.sunrise:%H:%M:%S}   Sunset {s.sunset:%H:%M:%S}   ({s.formatted_duration})")
    if s.civil_dawn and s.civil_dusk:
      click.echo(f"  First light {s.civil_dawn:%H:%M}   Last light {s.civil_dusk:%H:%M}")
  if r.comparison is not None:
    c = r.comparison
    click.echo(f"  {format_daily_change(c.daily_change_seconds)}")
    click.echo(f"  {format_cumulative_change(c.cumulative_change_seconds, c.is_gaining, c.reference_solstice_type)}")
  if r.velocity_seconds is not None:
    click.echo(f"  Velocity  {r.velocity_seconds:+d} s/day")
  if r.peak_day is not None:
    share = f"{r.velocity_fraction:.0%} of " if r.velocity_fraction is not None else ""
    click.echo(f"  {share}peak rate {r.peak_velocity_seconds} s/day on {r.peak_day:%b %d}")
  click.echo(f"  Season    {r.season.value.replace('_', ' ')} ({r.progress:.0%} through)")
  click.echo(f"  {r.days_since_solstice} days since the last solstice")
  if r.days_until_equinox:
    click.echo(f"  {r.days_until_equinox[0]} days to {r.days_until_equinox[1].label}")
  if r.days_until_solstice:
    click.echo(f"  {r.days_until_solstice[0]} days to {r.days_until_solstice[1].label}")

  if r.milestones:
    click.echo("Milestones")
    for m in r.milestones:
      when = f"reached {m.achieved_date:%b %d}" if m.is_achieved else f"in {m.days_until} days ({m.target_date:%b %d})"
      click.echo(f"  [{'x' if m.is_achieved else ' '}] {m.type.title:<28} {when}")

  rows = ld.recent_history(history, d) if history > 0 else []
  if rows:
    click.echo("Recent days")
    for rd, change in rows:
      click.echo(f"  {rd:%a %b %d}  {change:+d}s")


if __name__ == "__main__":
  main()
