"""Entry point running the REST API under uvicorn."""

import click
import uvicorn

from ..config import ServiceConfig
from ..utils.log_setup import setup_logging
from .app import create_app


@click.command()
@click.option('--host', default=None, help='Bind address (default: JQT_HOST or 127.0.0.1)')
@click.option('--port', type=int, default=None, help='Bind port (default: JQT_PORT or 8080)')
def main(host, port):
    """Serve the JSON Query Transformer REST API."""
    config = ServiceConfig.from_env()
    setup_logging(config.log_level)
    uvicorn.run(
        create_app(config),
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == '__main__':
    main()
