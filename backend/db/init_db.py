"""
Credential store schema management.

Usage (CLI):
    python -m backend.db.init_db                         # create missing tables
    python -m backend.db.init_db --reset                 # drop, then recreate
    python -m backend.db.init_db --database-url sqlite:///other.sqlite
"""

from __future__ import annotations

import click
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine

from backend.db.base import Base
from backend.db.session import engine as default_engine
from backend.models import user  # noqa: F401  - registers the users table


def init_db(*, reset: bool = False, bind: Engine | None = None) -> list[str]:
    """Create the auth tables, optionally dropping them first.

    Args:
        reset: Drop every known table before creating it again. Destroys
            all accounts.
        bind: Engine to use; defaults to the configured application engine.

    Returns:
        Sorted names of the tables present after the call.
    """
    target = bind or default_engine

    if reset:
        Base.metadata.drop_all(bind=target)
    Base.metadata.create_all(bind=target)

    return sorted(inspect(target).get_table_names())


@click.command(help="Create (or reset) the credential store schema.")
@click.option(
    "--reset",
    is_flag=True,
    default=False,
    help="Drop all tables before recreating them.",
)
@click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy URL to initialise instead of DATABASE_URL.",
)
def cli(reset: bool, database_url: str | None) -> None:
    """Initialise the schema and report the resulting tables."""
    target = create_engine(database_url) if database_url else None
    try:
        if reset:
            click.echo("Dropping existing tables …")
        tables = init_db(reset=reset, bind=target)
    finally:
        if target is not None:
            target.dispose()
    click.echo(f"Tables ready: {', '.join(tables)}")


if __name__ == "__main__":
    cli()
