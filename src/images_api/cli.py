# cli.py
import logging

import click

from images_api.config.settings import get_settings

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Images API"""
    pass


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        click.echo(f"  {key}: {value}")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind to")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, default=False, help="Restart the server on code changes")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    logger.info(f"Starting {settings.app_name} in {settings.deployment_mode} mode on {host}:{port}")

    uvicorn.run(
        "images_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
