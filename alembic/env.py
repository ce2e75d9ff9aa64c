"""Alembic environment: migrates the database named by DATABASE_URL to the Clario models."""
from logging.config import fileConfig

from alembic import context
from decouple import config as env
from sqlalchemy import create_engine, pool

from clario.config import normalize_database_url
from clario.database import Base
# Imported for their side effect of registering tables on Base.metadata
import clario.models  # noqa: F401
import clario.deadlines.models  # noqa: F401
import clario.documents.models  # noqa: F401
import clario.glossary.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    return normalize_database_url(env("DATABASE_URL"))


def run_migrations_offline() -> None:
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(get_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
