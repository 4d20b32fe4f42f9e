from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.errors import ApiException

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)) -> dict[str, str]:
    """Readiness check - verifies the database is reachable."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise ApiException(
            503, "SERVICE_UNAVAILABLE", "Database is not reachable"
        ) from e
    return {"status": "ready"}
