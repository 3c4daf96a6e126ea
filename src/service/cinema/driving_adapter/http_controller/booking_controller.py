from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.book_ticket_use_case import BookTicketUseCase
from src.service.cinema.driving_adapter.schema.booking_schema import (
    BookingRequest,
    BookingResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_200_OK)
@Logger.io
async def book_ticket(
    request: BookingRequest,
    use_case: BookTicketUseCase = Depends(BookTicketUseCase.depends),
) -> BookingResponse:
    booking_id = await use_case.book(
        showtime_id=request.showtime_id,  # type: ignore[arg-type]
        seat_number=request.seat_number,  # type: ignore[arg-type]
        user_id=request.user_id,  # type: ignore[arg-type]
    )
    return BookingResponse(booking_id=booking_id)
