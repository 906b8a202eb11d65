from logging.config import fileConfig

from alembic import context

from infra.db.base import Base, build_engine, default_db_url
import infra.db.models  # noqa


config = context.config

# infra.migrate sets configure_logger=False so setup_logging handlers survive
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata

# batch mode: SQLite cannot ALTER most constraints in place
_CONFIGURE_OPTS = {
    "target_metadata": target_metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def _db_url() -> str:
    return config.get_main_option("sqlalchemy.url") or default_db_url()


def run_migrations_offline() -> None:
    context.configure(
        url=_db_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_CONFIGURE_OPTS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        context.configure(connection=connection, **_CONFIGURE_OPTS)
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = build_engine(_db_url())
    try:
        with engine.connect() as conn:
            context.configure(connection=conn, **_CONFIGURE_OPTS)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
