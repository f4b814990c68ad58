"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.api.dependencies import get_analytics_db_session, get_db_session

router = APIRouter(tags=["health"])


async def _ping(session: AsyncSession) -> str:
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        return "connected"
    except Exception as e:
        return f"error: {e}"


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_db_session),
    analytics_session: AsyncSession = Depends(get_analytics_db_session),
):
    """Check API and both database connections."""
    db_status = await _ping(session)
    analytics_status = await _ping(analytics_session)
    healthy = db_status == "connected" and analytics_status == "connected"

    return {
        "status": "ok" if healthy else "degraded",
        "database": db_status,
        "analytics_database": analytics_status,
        "service": "Complaint statistics",
    }
