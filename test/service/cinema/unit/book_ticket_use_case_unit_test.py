from datetime import datetime
from unittest.mock import MagicMock
import uuid

import pytest

from src.platform.exception.exceptions import (
    InternalError,
    SeatAlreadyBookedError,
    ShowtimeNotFoundError,
    StorageConflictError,
)
from src.service.cinema.app.command.book_ticket_use_case import BookTicketUseCase
from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity
from test.service.cinema.fixtures import build_mock_uow


SHOWTIME = ShowtimeEntity(
    id=1,
    movie_id=1,
    theater='Hall A',
    start_time=datetime(2025, 2, 14, 11, 0),
    end_time=datetime(2025, 2, 14, 13, 0),
    price=12.5,
)
USER_ID = '84438967-f68f-4fa0-b620-0f08217e76af'


@pytest.mark.unit
class TestBookTicketUseCase:
    async def test_books_free_seat(self, mock_uow: MagicMock, mock_uow_factory: MagicMock) -> None:
        # Arrange
        mock_uow.showtime_repo.get_by_id.return_value = SHOWTIME
        mock_uow.ticket_repo.seat_taken.return_value = False
        use_case = BookTicketUseCase(uow_factory=mock_uow_factory)

        # Act
        booking_id = await use_case.book(showtime_id=1, seat_number=15, user_id=USER_ID)

        # Assert
        assert str(uuid.UUID(booking_id)) == booking_id
        ticket = mock_uow.ticket_repo.create.await_args.kwargs['ticket']
        assert (ticket.showtime_id, ticket.seat_number, ticket.user_id) == (1, 15, USER_ID)
        assert ticket.booking_id == booking_id
        mock_uow.commit.assert_awaited_once()

    async def test_each_booking_gets_its_own_id(
        self, mock_uow: MagicMock, mock_uow_factory: MagicMock
    ) -> None:
        mock_uow.showtime_repo.get_by_id.return_value = SHOWTIME
        mock_uow.ticket_repo.seat_taken.return_value = False
        use_case = BookTicketUseCase(uow_factory=mock_uow_factory)

        first = await use_case.book(showtime_id=1, seat_number=1, user_id=USER_ID)
        second = await use_case.book(showtime_id=1, seat_number=2, user_id=USER_ID)

        assert first != second

    async def test_unknown_showtime_is_not_found(
        self, mock_uow: MagicMock, mock_uow_factory: MagicMock
    ) -> None:
        mock_uow.showtime_repo.get_by_id.return_value = None
        use_case = BookTicketUseCase(uow_factory=mock_uow_factory)

        with pytest.raises(ShowtimeNotFoundError) as exc_info:
            await use_case.book(showtime_id=42, seat_number=1, user_id=USER_ID)

        assert exc_info.value.message == "Showtime not found with ID '42'"
        mock_uow.ticket_repo.create.assert_not_awaited()

    async def test_taken_seat_is_rejected(
        self, mock_uow: MagicMock, mock_uow_factory: MagicMock
    ) -> None:
        mock_uow.showtime_repo.get_by_id.return_value = SHOWTIME
        mock_uow.ticket_repo.seat_taken.return_value = True
        use_case = BookTicketUseCase(uow_factory=mock_uow_factory)

        with pytest.raises(SeatAlreadyBookedError) as exc_info:
            await use_case.book(showtime_id=1, seat_number=15, user_id=USER_ID)

        assert exc_info.value.message == 'Seat 15 is already booked for this showtime'
        mock_uow.ticket_repo.create.assert_not_awaited()

    async def test_lost_race_is_reported_as_seat_already_booked(self) -> None:
        # Arrange: both requests saw the seat free; the unique index rejects ours
        first, second = build_mock_uow(), build_mock_uow()
        for uow in (first, second):
            uow.showtime_repo.get_by_id.return_value = SHOWTIME
        first.ticket_repo.seat_taken.return_value = False
        first.ticket_repo.create.side_effect = StorageConflictError(
            'UNIQUE constraint failed', constraint='uq_tickets_showtime_seat'
        )
        second.ticket_repo.seat_taken.return_value = True
        use_case = BookTicketUseCase(uow_factory=MagicMock(side_effect=[first, second]))

        # Act / Assert
        with pytest.raises(SeatAlreadyBookedError):
            await use_case.book(showtime_id=1, seat_number=15, user_id=USER_ID)

        first.commit.assert_not_awaited()

    async def test_unexplained_conflict_is_internal_error(self) -> None:
        first, second = build_mock_uow(), build_mock_uow()
        for uow in (first, second):
            uow.showtime_repo.get_by_id.return_value = SHOWTIME
            uow.ticket_repo.seat_taken.return_value = False
        first.ticket_repo.create.side_effect = StorageConflictError('constraint failed')
        use_case = BookTicketUseCase(uow_factory=MagicMock(side_effect=[first, second]))

        with pytest.raises(InternalError) as exc_info:
            await use_case.book(showtime_id=1, seat_number=15, user_id=USER_ID)

        assert exc_info.value.message == 'Internal database error'
