from unittest.mock import AsyncMock, MagicMock

import pytest

from src.service.cinema.driven_adapter.repo.showtime_repo_impl import ShowtimeRepoImpl


def _session(dialect: str) -> MagicMock:
    session = MagicMock()
    session.get_bind.return_value.dialect.name = dialect
    session.execute = AsyncMock()
    return session


@pytest.mark.unit
class TestLockTheater:
    async def test_postgresql_takes_advisory_lock_per_theater(self) -> None:
        session = _session('postgresql')

        await ShowtimeRepoImpl(session).lock_theater(theater='Hall A')

        statement, params = session.execute.await_args.args
        assert 'pg_advisory_xact_lock' in str(statement)
        assert params == {'theater': 'Hall A'}

    async def test_sqlite_relies_on_the_immediate_transaction(self) -> None:
        session = _session('sqlite')

        await ShowtimeRepoImpl(session).lock_theater(theater='Hall A')

        session.execute.assert_not_awaited()

    @pytest.mark.parametrize('dialect', ['mysql', 'mssql', 'oracle'])
    async def test_other_dialects_are_refused(self, dialect: str) -> None:
        session = _session(dialect)

        with pytest.raises(NotImplementedError, match=dialect):
            await ShowtimeRepoImpl(session).lock_theater(theater='Hall A')

        session.execute.assert_not_awaited()
