"""
Showtime Repository Interface

Overlap is an interval predicate, so no column constraint can enforce it.
Callers must take `lock_theater` before reading overlapping rows and keep
the same transaction open until the write is committed.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.cinema.domain.entity.showtime_entity import ShowtimeEntity


class IShowtimeRepo(ABC):
    @abstractmethod
    async def get_by_id(
        self, *, showtime_id: int, for_update: bool = False
    ) -> Optional[ShowtimeEntity]:
        pass

    @abstractmethod
    async def get_with_movie_by_id(self, *, showtime_id: int) -> Optional[ShowtimeEntity]:
        """Showtime joined with its movie's title and release year (single read)"""
        pass

    @abstractmethod
    async def lock_theater(self, *, theater: str) -> None:
        """
        Serialize schedule changes for one theater until the transaction ends

        Args:
            theater: Theater name
        """
        pass

    @abstractmethod
    async def find_overlapping(
        self,
        *,
        theater: str,
        start_time: datetime,
        end_time: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[ShowtimeEntity]:
        pass

    @abstractmethod
    async def create(self, *, showtime: ShowtimeEntity) -> ShowtimeEntity:
        pass

    @abstractmethod
    async def update(self, *, showtime: ShowtimeEntity) -> ShowtimeEntity:
        pass

    @abstractmethod
    async def list_ids_by_movie_id(self, *, movie_id: int) -> List[int]:
        pass

    @abstractmethod
    async def delete_by_ids(self, *, showtime_ids: List[int]) -> int:
        """Returns number of deleted rows"""
        pass
