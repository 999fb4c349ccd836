"""CLI interface for aniquery"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import click

from aniquery.application.client import CatalogClient
from aniquery.domain.errors import CatalogError, OperationCancelled
from aniquery.domain.models.media import Media
from aniquery.infrastructure.config.config_manager import ConfigManager, ConfigurationError

logger = logging.getLogger(__name__)

ENTITY_TYPES = ["anime", "manga", "character", "staff", "studio"]


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)
    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO if verbose else logging.WARNING)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> None:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def _create_client(ctx: click.Context) -> CatalogClient:
    """Create a catalog client from config file, env and CLI overrides"""
    verbose = ctx.obj.get("verbose", False)
    try:
        config_manager = ConfigManager(config_path=ctx.obj.get("config_path"))
    except ConfigurationError as e:
        _die(str(e), verbose=verbose, exc=e)

    client = CatalogClient.from_config(config_manager.config)
    if ctx.obj.get("token"):
        client.set_token(ctx.obj["token"])
    return client


def _format_entry(position: int, item) -> str:
    if isinstance(item, Media):
        line = f"{position}. {item.display_title} (ID: {item.id})"
        if item.average_score is not None:
            line += f" - score {item.average_score}/100"
        return line
    return f"{position}. {item.display_name} (ID: {item.id})"


def _echo_entries(items: Iterable) -> None:
    shown = 0
    for shown, item in enumerate(items, start=1):
        click.echo(_format_entry(shown, item))
    if shown == 0:
        click.echo("No results.")


def _run(ctx: click.Context, action) -> None:
    """Run an API action, converting library errors into CLI errors"""
    verbose = ctx.obj.get("verbose", False)
    try:
        action()
    except click.ClickException:
        raise
    except CatalogError as e:
        _die(f"Request failed ({e.kind.value}): {e.message}", verbose=verbose, exc=e)
    except OperationCancelled as e:
        _die(str(e), verbose=verbose, exc=e)
    except ValueError as e:
        _die(str(e), verbose=verbose, exc=e)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .aniquery.yml config file",
)
@click.option("--token", type=str, envvar="ANIQUERY_TOKEN", help="Bearer token for authenticated calls")
@click.pass_context
def cli(ctx, verbose: bool, config: Path, token: Optional[str]):
    """aniquery - AniList catalog client"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["token"] = token


@cli.command()
@click.argument("entity", type=click.Choice(ENTITY_TYPES, case_sensitive=False))
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--per-page", default=10, show_default=True, type=int)
@click.pass_context
def popular(ctx, entity: str, page: int, per_page: int):
    """List the most popular entries of ENTITY."""
    client = _create_client(ctx)
    endpoint = getattr(client, entity.lower())
    _run(ctx, lambda: _echo_entries(endpoint.get_popular(page, per_page)))


@cli.command()
@click.argument("media", type=click.Choice(["anime", "manga"], case_sensitive=False))
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--per-page", default=10, show_default=True, type=int)
@click.pass_context
def trending(ctx, media: str, page: int, per_page: int):
    """List trending anime or manga."""
    client = _create_client(ctx)
    endpoint = getattr(client, media.lower())
    _run(ctx, lambda: _echo_entries(endpoint.get_trending(page, per_page)))


@cli.command()
@click.argument("entity", type=click.Choice(ENTITY_TYPES, case_sensitive=False))
@click.argument("entity_id", type=int)
@click.pass_context
def get(ctx, entity: str, entity_id: int):
    """Show one entry of ENTITY by ENTITY_ID."""
    client = _create_client(ctx)
    endpoint = getattr(client, entity.lower())

    def _show() -> None:
        item = endpoint.get_by_id(entity_id)
        click.echo(_format_entry(1, item))
        if item.site_url:
            click.echo(f"   {item.site_url}")

    _run(ctx, _show)


@cli.command()
@click.argument("entity", type=click.Choice(ENTITY_TYPES, case_sensitive=False))
@click.argument("text", type=str)
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--per-page", default=10, show_default=True, type=int)
@click.pass_context
def search(ctx, entity: str, text: str, page: int, per_page: int):
    """Search ENTITY entries matching TEXT."""
    client = _create_client(ctx)
    endpoint = getattr(client, entity.lower())
    _run(ctx, lambda: _echo_entries(endpoint.search(text, page, per_page)))


@cli.command()
@click.pass_context
def viewer(ctx):
    """Show the user owning the token (requires --token)."""
    client = _create_client(ctx)

    def _show() -> None:
        user = client.user.get_current_user()
        click.echo(f"{user.name} (ID: {user.id})")
        if user.unread_notification_count:
            click.echo(f"Unread notifications: {user.unread_notification_count}")

    _run(ctx, _show)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
