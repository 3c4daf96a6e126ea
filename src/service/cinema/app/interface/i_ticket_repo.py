"""
Ticket Repository Interface

(showtime_id, seat_number) and booking_id are unique in storage; `create`
raises StorageConflictError when either constraint (or the showtime foreign
key) rejects the insert.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.cinema.domain.entity.ticket_entity import TicketEntity


class ITicketRepo(ABC):
    @abstractmethod
    async def seat_taken(self, *, showtime_id: int, seat_number: int) -> bool:
        pass

    @abstractmethod
    async def create(self, *, ticket: TicketEntity) -> TicketEntity:
        pass

    @abstractmethod
    async def delete_by_showtime_ids(self, *, showtime_ids: List[int]) -> int:
        """Returns number of deleted rows"""
        pass
