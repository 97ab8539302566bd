from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# --- Import metadata from the models ---
from resume_core.core.config import Settings
from resume_core.db.base import Base
from resume_core.models import resume, sections, user  # noqa: F401
target_metadata = Base.metadata

# Alembic runs on the sync drivers
_SYNC_DRIVERS = {"+aiosqlite": "+pysqlite", "+asyncpg": "+psycopg"}

db_url = Settings().DATABASE_URL
for async_driver, sync_driver in _SYNC_DRIVERS.items():
    db_url = db_url.replace(async_driver, sync_driver)

def run_migrations_offline():
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config(
        {"sqlalchemy.url": db_url},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
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
