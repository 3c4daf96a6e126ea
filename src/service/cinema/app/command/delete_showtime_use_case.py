from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, InternalError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.update_showtime_use_case import showtime_not_found_by_id


class DeleteShowtimeUseCase:
    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

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
    async def delete(self, *, showtime_id: int) -> None:
        """Delete the showtime and every ticket sold for it, atomically."""
        try:
            async with self.uow_factory() as uow:
                showtime = await uow.showtime_repo.get_by_id(
                    showtime_id=showtime_id, for_update=True
                )
                if showtime is None:
                    raise showtime_not_found_by_id(showtime_id)

                deleted_tickets = await uow.ticket_repo.delete_by_showtime_ids(
                    showtime_ids=[showtime_id]
                )
                await uow.showtime_repo.delete_by_ids(showtime_ids=[showtime_id])
                await uow.commit()
        except CustomBaseError:
            raise
        except Exception as e:
            raise InternalError('Internal database error', details=f'Error: {e!r}') from e

        Logger.base.info(
            f'🗑️ [DELETE_SHOWTIME] Deleted showtime {showtime_id} with {deleted_tickets} tickets'
        )
