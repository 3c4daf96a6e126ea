import time
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    InternalError,
    SeatAlreadyBookedError,
    ShowtimeNotFoundError,
    StorageConflictError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.cinema_metrics import metrics
from src.platform.observability.tracing import record_rejection
from src.service.cinema.domain.entity.ticket_entity import TicketEntity


def seat_already_booked(seat_number: int) -> SeatAlreadyBookedError:
    return SeatAlreadyBookedError(f'Seat {seat_number} is already booked for this showtime')


def showtime_not_found_for_booking(showtime_id: int) -> ShowtimeNotFoundError:
    return ShowtimeNotFoundError(f"Showtime not found with ID '{showtime_id}'")


class BookTicketUseCase:
    """
    Book one seat of a showtime

    Flow:
    1. Check the showtime exists (ShowtimeNotFound)
    2. Fail fast when the seat already has a ticket (SeatAlreadyBooked)
    3. Insert the ticket with a fresh UUID booking id

    Two requests can both pass step 2; the unique (showtime_id, seat_number)
    constraint rejects the second insert, which is then re-checked and
    reported as SeatAlreadyBooked.
    """

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def book(self, *, showtime_id: int, seat_number: int, user_id: str) -> str:
        """
        Returns:
            The booking id (UUID string)

        Raises:
            ShowtimeNotFoundError: Unknown showtime
            SeatAlreadyBookedError: Seat taken, including by a concurrent request
        """
        booking_id = str(uuid_utils.uuid4())
        start = time.perf_counter()

        with self.tracer.start_as_current_span(
            'use_case.book_ticket',
            attributes={
                'booking.id': booking_id,
                'showtime.id': showtime_id,
                'ticket.seat_number': seat_number,
            },
        ):
            try:
                await self._reserve_seat(
                    showtime_id=showtime_id,
                    seat_number=seat_number,
                    user_id=user_id,
                    booking_id=booking_id,
                )
            except CustomBaseError as e:
                record_rejection(e)
                metrics.record_booking(
                    result=e.error_type.lower(), duration=time.perf_counter() - start
                )
                raise

            metrics.record_booking(result='booked', duration=time.perf_counter() - start)
            Logger.base.info(
                f'🎟️ [BOOK_TICKET] Booking {booking_id}: seat {seat_number} '
                f'of showtime {showtime_id} for user {user_id}'
            )
            return booking_id

    async def _reserve_seat(
        self, *, showtime_id: int, seat_number: int, user_id: str, booking_id: str
    ) -> None:
        try:
            async with self.uow_factory() as uow:
                if await uow.showtime_repo.get_by_id(showtime_id=showtime_id) is None:
                    raise showtime_not_found_for_booking(showtime_id)

                if await uow.ticket_repo.seat_taken(
                    showtime_id=showtime_id, seat_number=seat_number
                ):
                    raise seat_already_booked(seat_number)

                await uow.ticket_repo.create(
                    ticket=TicketEntity(
                        showtime_id=showtime_id,
                        seat_number=seat_number,
                        user_id=user_id,
                        booking_id=booking_id,
                    )
                )
                await uow.commit()
        except StorageConflictError as e:
            Logger.base.warning(
                f'⚠️ [BOOK_TICKET] Insert rejected for seat {seat_number} '
                f'of showtime {showtime_id}, re-checking'
            )
            metrics.record_storage_conflict(operation='book_ticket')
            async with self.uow_factory() as uow:
                if await uow.showtime_repo.get_by_id(showtime_id=showtime_id) is None:
                    raise showtime_not_found_for_booking(showtime_id) from e
                if await uow.ticket_repo.seat_taken(
                    showtime_id=showtime_id, seat_number=seat_number
                ):
                    raise seat_already_booked(seat_number) from e
            raise InternalError('Internal database error', details=str(e)) from e
