"""Async engines and sessions: operational and analytics databases."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


class Base(DeclarativeBase):
    pass


engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    pool_timeout=settings.db_pool_timeout,
    pool_pre_ping=True,
    echo=settings.debug,
)

analytics_engine = create_async_engine(
    settings.analytics_database_url,
    pool_size=settings.analytics_pool_size,
    pool_timeout=settings.db_pool_timeout,
    pool_pre_ping=True,
    echo=settings.debug,
)

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)
analytics_session_factory = async_sessionmaker(analytics_engine, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one operational session per request."""
    async with async_session_factory() as session:
        yield session


async def get_analytics_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one analytics session per request (read-only use)."""
    async with analytics_session_factory() as session:
        yield session
