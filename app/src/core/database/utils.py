from sqlalchemy.ext.asyncio.engine import AsyncEngine
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.config import settings
from src.core.logging import get_logger

logger = get_logger(__name__)


async def init_db(db_engine: AsyncEngine) -> None:
    """
    Check the database is reachable and, on local environments, create any
    missing tables for the registered models.
    """
    # registers every table on SQLModel.metadata
    import src.domain.models  # noqa: F401

    async with AsyncSession(db_engine) as session:
        (await session.exec(select(1))).all()

    if settings.ENVIRONMENT != "local":
        return

    async with db_engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)

    logger.info("Database tables ensured", extra={"event_type": "db_tables_created"})
