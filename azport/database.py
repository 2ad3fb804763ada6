import logging

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.orm import sessionmaker, declarative_base

from azport.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = settings.database_url.startswith("sqlite")

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    # Sync routes run in a threadpool; the session, not the thread, owns the connection.
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Columns added after the first release: (table, column, DDL).
COLUMN_MIGRATIONS = [
    ("products", "document", "ALTER TABLE products ADD COLUMN document TEXT"),
]


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create missing tables, then add any forward-compatible columns."""
    from azport.models import (  # noqa: F401
        Category,
        JobOpening,
        Product,
        User,
    )

    try:
        inspector = inspect(engine)
        existing_tables = set(inspector.get_table_names())

        # create_all only creates missing tables, never drops existing ones.
        Base.metadata.create_all(bind=engine)
        created_tables = sorted(set(Base.metadata.tables.keys()) - existing_tables)
        if created_tables:
            logger.info("Created missing DB tables: %s", ", ".join(created_tables))
        ensure_columns()
        logger.info("Database schema ready")
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        raise


def ensure_columns() -> list[str]:
    """Add columns missing from tables created by older releases. Returns the added column names."""
    added = []
    inspector = inspect(engine)
    with engine.begin() as conn:
        for table, column, ddl in COLUMN_MIGRATIONS:
            existing = {c["name"] for c in inspector.get_columns(table)}
            if column in existing:
                continue
            conn.execute(text(ddl))
            logger.info("Added %s column to %s table", column, table)
            added.append(column)
    return added
