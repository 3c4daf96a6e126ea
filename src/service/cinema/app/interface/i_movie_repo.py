"""
Movie Repository Interface

Catalog storage. Title uniqueness (case-insensitive) is enforced by the
storage itself; `create`/`update` raise StorageConflictError when the
constraint rejects a write.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.movie_entity import MovieEntity


class IMovieRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, movie_id: int) -> Optional[MovieEntity]:
        pass

    @abstractmethod
    async def get_by_title(self, *, title: str, for_update: bool = False) -> Optional[MovieEntity]:
        """
        Exact title match

        Args:
            title: Stored title
            for_update: Lock the row until the transaction ends

        Returns:
            Movie entity or None if not found
        """
        pass

    @abstractmethod
    async def title_exists(self, *, title: str) -> bool:
        """Case-insensitive title lookup"""
        pass

    @abstractmethod
    async def list_all(self) -> List[MovieEntity]:
        pass

    @abstractmethod
    async def create(self, *, movie: MovieEntity) -> MovieEntity:
        pass

    @abstractmethod
    async def update(self, *, movie: MovieEntity) -> MovieEntity:
        pass

    @abstractmethod
    async def delete_by_id(self, *, movie_id: int) -> None:
        pass
