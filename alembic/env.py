"""
Alembic environment configuration.
Uses a SYNC engine for migrations, even though the app uses async SQLAlchemy.
"""

from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection

from alembic import context

# Import your models and config
from app.core.config import settings
from app.core.database import Base
from app.models import *  # noqa: Import all models for autogenerate

# Alembic Config object
config = context.config

# Alembic needs a SYNC driver, not aiosqlite/asyncpg
database_url = settings.DATABASE_URL_SYNC
if "+aiosqlite" in database_url:
    database_url = database_url.replace("+aiosqlite", "")

# Use attributes to avoid ConfigParser interpolation issues with % in URL
config.attributes["sqlalchemy.url"] = database_url

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Model's MetaData object for 'autogenerate' support
target_metadata = Base.metadata


def _url() -> str:
    return config.attributes.get("sqlalchemy.url") or config.get_main_option("sqlalchemy.url") or database_url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits the SQL to the script output without a DBAPI connection.
    """
    context.configure(
        url=_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations with the given connection."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with a SYNC engine."""
    connectable = create_engine(
        _url(),
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
