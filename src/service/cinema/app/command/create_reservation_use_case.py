from datetime import date
from typing import Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import (
    NotFoundError,
    SeatAlreadyBookedError,
    StoreUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.reservation_result import RejectionReason, ReservationResult
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.validators import validate_reservation


class CreateReservationUseCase:
    """
    Admit or reject a reservation for one (schedule, sheet, date).

    Flow:
    1. Resolve schedule and sheet (NotFoundError when missing)
    2. Reject sheets outside the schedule's screen
    3. Validate the candidate reservation
    4. Fast-path availability check, no write when taken
    5. Insert + commit; the unique constraint decides concurrent races

    Every rejection is returned as a value and leaves the store untouched.
    """

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow)

    @Logger.io
    async def execute(
        self, *, user: UserEntity, schedule_id: int, sheet_id: int, date: date
    ) -> ReservationResult:
        async with self.uow:
            schedule = await self.uow.cinema_query_repo.get_schedule_by_id(schedule_id=schedule_id)
            if not schedule:
                raise NotFoundError('Schedule not found')
            sheet = await self.uow.cinema_query_repo.get_sheet_by_id(sheet_id=sheet_id)
            if not sheet:
                raise NotFoundError('Sheet not found')

            if not schedule.offers(sheet):
                return self._reject(RejectionReason.SEAT_NOT_IN_SCREEN, sheet_id=sheet_id)

            reservation = Reservation.create(
                user=user, schedule_id=schedule_id, sheet_id=sheet_id, date=date
            )
            if errors := validate_reservation(reservation):
                return self._reject(
                    RejectionReason.VALIDATION_FAILED, sheet_id=sheet_id, errors=tuple(errors)
                )

            try:
                if await self.uow.reservation_query_repo.exists(
                    schedule_id=schedule_id, sheet_id=sheet_id, date=date
                ):
                    return self._reject(RejectionReason.SEAT_ALREADY_BOOKED, sheet_id=sheet_id)

                created = await self.uow.reservation_command_repo.create(reservation=reservation)
                await self.uow.commit()
            except SeatAlreadyBookedError:
                # Lost the race between the pre-check and the insert
                return self._reject(RejectionReason.SEAT_ALREADY_BOOKED, sheet_id=sheet_id)
            except StoreUnavailableError:
                return self._reject(RejectionReason.STORE_FAILURE, sheet_id=sheet_id)

        Logger.base.info(
            f'🎟️  [Reservation] created id={created.id} schedule={schedule_id} '
            f'sheet={sheet_id} date={date}'
        )
        return ReservationResult.created(created)

    @staticmethod
    def _reject(reason: RejectionReason, *, sheet_id: int, errors: tuple = ()) -> ReservationResult:
        Logger.base.info(f'🚫 [Reservation] rejected sheet={sheet_id}: {reason.message}')
        return ReservationResult.rejected(reason, errors)
