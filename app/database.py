from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from app.config import DATABASE_URL, DB_ECHO

# ---------------------------
# Engine
# ---------------------------
engine = create_async_engine(
    DATABASE_URL,
    echo=DB_ECHO,  # set DB_ECHO=True for SQL debug logs
    future=True
)

# ---------------------------
# Session Local
# ---------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# ---------------------------
# Base model
# ---------------------------
Base = declarative_base()

# ---------------------------
# Dependency for FastAPI
# ---------------------------
async def get_db():
    """
    One session per request. Anything left uncommitted when the request
    fails is rolled back before the session is returned to the pool.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
