"""Management commands for the dental clinic admin backend."""

from __future__ import annotations

import json
import logging

import click

from dental_admin.main import create_app  # loads .env before config is read
from dental_admin.core.api_utils import STORE_EXTENSION
from dental_admin.core.config import get_seed_on_startup
from dental_admin.db.seed import seed_mock_data
from dental_admin.repositories.json_collection import decode_document
from dental_admin.repositories.kv_store import AUTH_USER_KEY
from dental_admin.repositories.user_repo import UserRepository

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

# Create the Flask application once so commands can share configuration.
app = create_app({"SEED_ON_STARTUP": False})
store = app.extensions[STORE_EXTENSION]


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("seed")
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite users, patients and incidents even if they already exist.",
)
def seed(force: bool) -> None:
    """Write the demo users, patients and appointments."""
    written = seed_mock_data(store, force=force)
    if written:
        logging.info("Seeded keys: %s", ", ".join(written))
    else:
        logging.info("All collections already present; nothing seeded.")


@cli.command("reset-auth")
def reset_auth() -> None:
    """Forget the stored logged-in user."""
    UserRepository(store).clear_auth_user()
    logging.info("Removed '%s' from the store.", AUTH_USER_KEY)


@cli.command("dump")
@click.argument("key")
def dump(key: str) -> None:
    """Print the JSON document stored under KEY."""
    raw = store.get(key)
    if raw is None:
        raise click.ClickException(f"No value stored under '{key}'.")
    click.echo(json.dumps(decode_document(key, raw), indent=2))


@cli.command("run")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=5000, show_default=True, type=int)
@click.option("--debug", is_flag=True, default=False)
def run(host: str, port: int, debug: bool) -> None:
    """Serve the API with the Flask development server."""
    if get_seed_on_startup():
        seed_mock_data(store)
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    cli()
