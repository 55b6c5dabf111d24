"""CLI entry point for inspecting discovered ofono accounts.

Usage:
    ofono-accounts list                              # Discovered account names
    ofono-accounts show ofono/ofono/account0         # All settings of one account
    ofono-accounts show ofono/ofono/account0 -k protocol
    ofono-accounts serve --port 8080                 # HTTP inspection API
"""

import logging
from pathlib import Path

import click
import uvicorn

from ofono_accounts.account_manager import RecordingAccountManager
from ofono_accounts.config import AccountsConfig, DEFAULT_CONFIG_PATH
from ofono_accounts.exceptions import AccountStorageError
from ofono_accounts.http_api import create_app
from ofono_accounts.storage import OfonoAccountStorage

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _load_storage(ctx: click.Context) -> OfonoAccountStorage:
    config: AccountsConfig = ctx.obj["config"]
    try:
        return OfonoAccountStorage.from_config(config)
    except AccountStorageError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Path to config YAML")
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]))
@click.pass_context
def main(ctx: click.Context, config: str, log_level: str | None):
    """Inspect the read-only ril modem accounts offered to Mission Control."""
    config_path = Path(config).expanduser()
    try:
        accounts_config = AccountsConfig.from_yaml(str(config_path))
    except AccountStorageError as e:
        raise click.ClickException(str(e)) from e

    level = log_level or accounts_config.log_level
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    logger.debug("Using config %s", config_path)

    ctx.ensure_object(dict)
    ctx.obj["config"] = accounts_config


@main.command("list")
@click.pass_context
def list_accounts(ctx: click.Context):
    """Print every discovered account name."""
    storage = _load_storage(ctx)
    for name in storage.list():
        click.echo(name)


@main.command()
@click.argument("account_name")
@click.option("--key", "-k", default=None, help="Show a single setting")
@click.pass_context
def show(ctx: click.Context, account_name: str, key: str | None):
    """Print the settings pushed for one account."""
    storage = _load_storage(ctx)
    manager = RecordingAccountManager()
    if not storage.get(manager, account_name, key):
        raise click.ClickException(f"Unknown account: {account_name}")

    click.echo(f"account: {account_name}")
    click.echo(f"identifier: {storage.get_identifier(account_name)}")
    click.echo(f"restrictions: {storage.get_restrictions(account_name)}")
    for param, value in sorted(manager.values_for(account_name).items()):
        click.echo(f"  {param} = {value if value is not None else '(unset)'}")


@main.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", "-p", default=None, type=int, help="Port for the HTTP API")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None):
    """Serve the read-only HTTP inspection API."""
    config: AccountsConfig = ctx.obj["config"]
    host = host or config.server_host
    port = port or config.server_port

    storage = _load_storage(ctx)
    app = create_app(storage)

    logger.info("Serving %d account(s) on %s:%d", len(storage.list()), host, port)
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
