from pathlib import Path
import logging

import click

from ..core.yearly import monthly_overview, year_stats, year_table
from ..io.manifest import build_manifest, write_manifest
from ..io.write_jsonl import write_daylight_jsonl
from ..io.write_parquet import write_daylight_parquet
from ..model.config import load_config

logger = logging.getLogger(__name__)

WRITERS = {
  "parquet": write_daylight_parquet,
  "jsonl": write_daylight_jsonl,
}


@click.command()
@click.option("--config", type=click.Path(exists=True), help="YAML config overriding the defaults")
@click.option("--year", required=True, type=int)
@click.option("--out", "out_dir", default="out/", show_default=True, type=click.Path())
@click.option("--format", "fmt", type=click.Choice(sorted(WRITERS)), default="parquet", show_default=True)
def main(config, year, out_dir, fmt):
  logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
  cfg = load_config(config)
  if cfg.location is None:
    raise click.UsageError("config has no location")
  coordinate = cfg.location.coordinate()
  tz = cfg.location.tzinfo()

  rows = year_table(year, coordinate, tz)
  out = Path(out_dir) / f"{year:04d}"
  data_path = out / f"daylight_{year:04d}.{fmt}"
  written = WRITERS[fmt](rows, str(data_path))
  logger.info(f"Wrote {written} days to {data_path}")

  stats = year_stats(rows)
  months = monthly_overview(year, coordinate, tz)
  write_manifest(out / "manifest.json", build_manifest(year, cfg.location.model_dump(), rows, stats, months))

  click.echo(f"Done. Wrote {year} daylight table to {out}")
  if stats.shortest_day:
    click.echo(f"Shortest day {stats.shortest_day} ({stats.shortest_seconds // 60} min), "
               f"longest day {stats.longest_day} ({stats.longest_seconds // 60} min)")


if __name__ == "__main__":
  main()
