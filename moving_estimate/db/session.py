from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from moving_estimate.core.config import settings
from moving_estimate.models.base import Base

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, future=True)
AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models():
    """Create every table registered on the declarative base."""
    import moving_estimate.models.catalog  # noqa: F401
    import moving_estimate.models.customer  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
