import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from vidshare.config import settings

logger = logging.getLogger(__name__)


def _engine_options(database_url: str) -> dict:
    # SQLite has no server side pool to tune
    if database_url.startswith("sqlite"):
        return {"echo": settings.debug}

    if settings.environment == "production":
        return {
            "pool_size": 20,
            "max_overflow": 50,
            "pool_timeout": 60,
            "pool_recycle": 1800,
        }
    return {
        "echo": settings.debug,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
    }


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Make SQLite honour ON DELETE rules the way PostgreSQL does."""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def insert_if_absent(db: AsyncSession, model, values: dict, conflict_columns: list[str]):
    """
    Build ``INSERT ... ON CONFLICT DO NOTHING`` for the session's dialect.

    Executing the statement reports ``rowcount == 1`` only for the caller
    that actually inserted the row, which makes it a set-if-absent primitive.
    """
    dialect = db.bind.dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"Conditional insert is not supported for dialect '{dialect}'")

    return insert(model).values(**values).on_conflict_do_nothing(index_elements=conflict_columns)


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db():
    logger.debug("Opening database session...")
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await db.rollback()
            raise
        finally:
            await db.close()
            logger.debug("Database session closed.")


async def init_models() -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata
    import vidshare.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created (if not existing).")
