"""CLI command to start the daylight API server."""

import logging
import click
import uvicorn

from ..api import DaylightRestAPI
from ..model.config import load_config
from ..service import LongerDays

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Configuration file path",
)
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind to (default: 127.0.0.1)",
)
@click.option(
    "--port",
    default=8080,
    type=int,
    help="Port to bind to (default: 8080)",
)
def main(config, host, port):
    """Start the LongerDays API server.

    Serves daylight, comparison, season and milestone data for the configured
    location.

    Examples:
        # Serve the default location
        longerdays-serve

        # Serve a location from a config file
        longerdays-serve --config my-location.yaml --port 9000
    """
    try:
        cfg = load_config(config)
        service = LongerDays(cfg)
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        logger.exception("Configuration error")
        return

    api = DaylightRestAPI(service)
    click.echo(f"Starting API server on http://{host}:{port}")
    click.echo(f"   Health Check:  http://{host}:{port}/health")
    click.echo(f"   API Docs:      http://{host}:{port}/docs")

    try:
        uvicorn.run(api.app, host=host, port=port, log_level="info")
    except KeyboardInterrupt:
        click.echo("\nShutting down...")


if __name__ == "__main__":
    main()
