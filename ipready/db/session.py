"""
Database session management
"""
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from ipready.core.config import settings
from ipready.db.base import Base


def _casefold(value):
    return value.casefold() if value is not None else None


def register_sqlite_functions(engine: AsyncEngine) -> AsyncEngine:
    """Give every new SQLite connection a Unicode-aware ``casefold(text)`` function"""
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("casefold", 1, _casefold)

    return engine


# Create async engine
engine = register_sqlite_functions(create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True
))

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

async def get_db() -> AsyncSession:
    """Dependency to get database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()

async def init_models(bind=None):
    """Create all tables that do not exist yet"""
    from ipready.db.models import protein, process, evidence, document, query  # noqa: F401
    
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
