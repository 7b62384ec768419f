from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.domain.enum.availability import Availability


class CheckAvailabilityUseCase:
    """Read-only: Taken iff a reservation holds the (schedule, sheet, date) triple"""

    def __init__(self, *, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def execute(self, *, schedule_id: int, sheet_id: int, date: date) -> Availability:
        reserved = await self.reservation_query_repo.exists(
            schedule_id=schedule_id, sheet_id=sheet_id, date=date
        )
        return Availability.from_reserved(reserved)
