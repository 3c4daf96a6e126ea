from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_ticket_repo import ITicketRepo
from src.service.cinema.domain.entity.ticket_entity import TicketEntity
from src.service.cinema.driven_adapter.model.ticket_model import TicketModel
from src.service.cinema.driven_adapter.repo.constraint_guard import translate_integrity_error


class TicketRepoImpl(ITicketRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def seat_taken(self, *, showtime_id: int, seat_number: int) -> bool:
        result = await self.session.execute(
            select(TicketModel.id)
            .where(TicketModel.showtime_id == showtime_id)
            .where(TicketModel.seat_number == seat_number)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        model = TicketModel(
            showtime_id=ticket.showtime_id,
            seat_number=ticket.seat_number,
            user_id=ticket.user_id,
            booking_id=ticket.booking_id,
        )
        async with translate_integrity_error('Ticket insert'):
            self.session.add(model)
            await self.session.flush()

        return TicketEntity(
            showtime_id=model.showtime_id,
            seat_number=model.seat_number,
            user_id=model.user_id,
            booking_id=model.booking_id,
            id=model.id,
        )

    @Logger.io
    async def delete_by_showtime_ids(self, *, showtime_ids: List[int]) -> int:
        if not showtime_ids:
            return 0
        result = await self.session.execute(
            delete(TicketModel).where(TicketModel.showtime_id.in_(showtime_ids))
        )
        return result.rowcount or 0
