"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database per pytest worker (pytest-xdist aware)
- Table cleanup around every integration test
- The session-scoped TestClient
- BDD step definitions (imported from bdd_steps_loader.py)
- Service fixtures (imported from fixture_loader.py)

Architecture:
- Unit tests (marked `unit`): mocks only, no database
- Integration tests: real SQLite database with the same schema as production
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_path = Path(tempfile.gettempdir()) / f'cinema_test_{worker_id}.db'
    os.environ['TEST_DB_PATH'] = str(db_path)
    os.environ['DATABASE_URL_ASYNC'] = f'sqlite+aiosqlite:///{db_path}'

    test_log_dir = Path(__file__).parent / 'test_log'
    os.environ['LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine, delete  # noqa: E402

from src.platform.database.orm_db_setting import Base  # noqa: E402


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def _sync_database_url() -> str:
    return f'sqlite:///{os.environ["TEST_DB_PATH"]}'


def _setup_test_database() -> None:
    """Recreate the schema in a fresh database file."""
    import src.service.cinema.driven_adapter.model  # noqa: F401

    Path(os.environ['TEST_DB_PATH']).unlink(missing_ok=True)
    engine = create_engine(_sync_database_url())
    try:
        Base.metadata.create_all(engine)
    finally:
        engine.dispose()


def _clean_all_tables() -> None:
    engine = create_engine(_sync_database_url())
    try:
        with engine.begin() as conn:
            # Children first (foreign keys)
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(delete(table))
    finally:
        engine.dispose()


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return
    _setup_test_database()


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    _clean_all_tables()
    yield
    _clean_all_tables()


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[Any, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


# =============================================================================
# Load BDD steps and service fixtures
# =============================================================================
from test.bdd_steps_loader import *  # noqa: E402, F401, F403
from test.fixture_loader import *  # noqa: E402, F401, F403
