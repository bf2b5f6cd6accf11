import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from qr_cafe import models  # noqa: F401  регистрирует таблицы в metadata
from qr_cafe.db.base import Base
from qr_cafe.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def sync_database_url(url: str) -> str:
    """
    Для генерации SQL-скрипта нужен синхронный диалект:
    asyncpg меняем на psycopg2, у sqlite просто убираем драйвер.
    """
    return url.replace("+asyncpg", "+psycopg2").replace("+aiosqlite", "")


def run_migrations_offline():
    """alembic upgrade --sql: печатаем DDL для cafes/menu_items/orders без подключения к базе."""
    context.configure(
        url=sync_database_url(settings.DATABASE_URL),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def apply_migrations(connection):
    # render_as_batch нужен для ALTER TABLE на sqlite
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    """
    Накатываем миграции на DATABASE_URL из настроек приложения.
    Движок тот же async-драйвер, что и у сервиса; сами миграции синхронные, поэтому идут через run_sync.
    """
    engine = create_async_engine(settings.DATABASE_URL, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(apply_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
