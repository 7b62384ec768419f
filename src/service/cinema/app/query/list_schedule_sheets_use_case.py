from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.reservation_draft import SheetAvailability
from src.service.cinema.app.interface.i_cinema_query_repo import ICinemaQueryRepo
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo


class ListScheduleSheetsUseCase:
    def __init__(
        self,
        *,
        cinema_query_repo: ICinemaQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
    ) -> None:
        self.cinema_query_repo = cinema_query_repo
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        cinema_query_repo: ICinemaQueryRepo = Depends(Provide[Container.cinema_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(
            cinema_query_repo=cinema_query_repo, reservation_query_repo=reservation_query_repo
        )

    @Logger.io
    async def execute(
        self, *, schedule_id: int, date: date, movie_id: Optional[int] = None
    ) -> List[SheetAvailability]:
        """Seat map of the schedule's screen for one date, ordered by (row, column)"""
        schedule = await self.cinema_query_repo.get_schedule_by_id(schedule_id=schedule_id)
        if not schedule or (movie_id is not None and not schedule.belongs_to(movie_id)):
            raise NotFoundError('Schedule not found')

        sheets = await self.cinema_query_repo.list_sheets_by_screen(screen_id=schedule.screen_id)
        reserved_ids = await self.reservation_query_repo.list_reserved_sheet_ids(
            schedule_id=schedule_id, date=date
        )
        return [
            SheetAvailability(sheet=sheet, reserved=sheet.id in reserved_ids) for sheet in sheets
        ]
