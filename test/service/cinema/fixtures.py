"""Fixtures shared by cinema service tests."""

from collections.abc import AsyncGenerator, Callable
import os
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork


@pytest.fixture
def context() -> dict[str, Any]:
    """Unified state fixture for all BDD tests."""
    return {}


# =============================================================================
# Unit test helpers
# =============================================================================
def build_mock_uow() -> MagicMock:
    """Unit of work double: async context manager exposing AsyncMock repositories."""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.movie_repo = AsyncMock()
    uow.showtime_repo = AsyncMock()
    uow.ticket_repo = AsyncMock()
    return uow


@pytest.fixture
def mock_uow() -> MagicMock:
    return build_mock_uow()


@pytest.fixture
def mock_uow_factory(mock_uow: MagicMock) -> MagicMock:
    return MagicMock(return_value=mock_uow)


# =============================================================================
# Integration helpers (real SQLite database prepared by test/conftest.py)
# =============================================================================
@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    db = Database(db_url=os.environ['DATABASE_URL_ASYNC'])
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], AbstractUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(database)
