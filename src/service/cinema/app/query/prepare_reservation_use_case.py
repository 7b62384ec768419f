from datetime import date
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.reservation_draft import ReservationDraft
from src.service.cinema.app.interface.i_cinema_query_repo import ICinemaQueryRepo
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.domain.enum.availability import Availability


class PrepareReservationUseCase:
    """
    Confirmation step before CreateReservation.

    Resolves movie, schedule and the selected sheet, and reports whether the
    seat is still free. Nothing is written; the seat can still be taken
    between this step and CreateReservation.
    """

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
        self,
        *,
        movie_id: int,
        schedule_id: int,
        sheet_id: Optional[int],
        date: Optional[date],
    ) -> ReservationDraft:
        if not date or not sheet_id:
            raise DomainError('Please select a seat.', 400)

        movie = await self.cinema_query_repo.get_movie_by_id(movie_id=movie_id)
        if not movie:
            raise NotFoundError('Movie not found')

        schedule = await self.cinema_query_repo.get_schedule_by_id(schedule_id=schedule_id)
        if not schedule or not schedule.belongs_to(movie_id):
            raise NotFoundError('Schedule not found')

        # Only seats of the schedule's screen are offered
        sheet = await self.cinema_query_repo.get_sheet_in_screen(
            sheet_id=sheet_id, screen_id=schedule.screen_id
        )
        if not sheet:
            raise NotFoundError('Sheet not found in this screen')

        reserved = await self.reservation_query_repo.exists(
            schedule_id=schedule_id, sheet_id=sheet_id, date=date
        )
        return ReservationDraft(
            movie=movie,
            schedule=schedule,
            sheet=sheet,
            date=date,
            availability=Availability.from_reserved(reserved),
        )
