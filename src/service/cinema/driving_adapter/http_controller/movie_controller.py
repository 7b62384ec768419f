from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends

from src.platform.exception.exceptions import SeatAlreadyBookedError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.list_schedule_sheets_use_case import ListScheduleSheetsUseCase
from src.service.cinema.app.query.prepare_reservation_use_case import PrepareReservationUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.domain.enum.availability import Availability
from src.service.cinema.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)
from src.service.cinema.driving_adapter.http_controller.schema.reservation_schema import (
    MovieResponse,
    ReservationDraftResponse,
    ScheduleResponse,
    SheetAvailabilityResponse,
    SheetResponse,
)


router = APIRouter()


@router.get('/{movie_id}/reservation/new', response_model=ReservationDraftResponse)
@Logger.io
async def prepare_reservation(
    movie_id: int,
    schedule_id: int,
    sheet_id: Optional[int] = None,
    date: Optional[date] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: PrepareReservationUseCase = Depends(PrepareReservationUseCase.depends),
) -> ReservationDraftResponse:
    """Confirmation step: the selected seat must still be free"""
    draft = await use_case.execute(
        movie_id=movie_id, schedule_id=schedule_id, sheet_id=sheet_id, date=date
    )
    if draft.availability is Availability.TAKEN:
        raise SeatAlreadyBookedError()

    movie, schedule, sheet = draft.movie, draft.schedule, draft.sheet
    return ReservationDraftResponse(
        movie=MovieResponse(
            id=movie.id or 0,
            name=movie.name,
            year=movie.year,
            description=movie.description,
            image_url=movie.image_url,
            is_showing=movie.is_showing,
        ),
        schedule=ScheduleResponse(
            id=schedule.id or 0, movie_id=schedule.movie_id, screen_id=schedule.screen_id
        ),
        sheet=SheetResponse(
            id=sheet.id or 0,
            screen_id=sheet.screen_id,
            row=sheet.row,
            column=sheet.column,
            label=sheet.label,
        ),
        date=draft.date,
        status=draft.availability.value,
    )


@router.get(
    '/{movie_id}/schedule/{schedule_id}/sheets', response_model=List[SheetAvailabilityResponse]
)
@Logger.io
async def list_schedule_sheets(
    movie_id: int,
    schedule_id: int,
    date: date,
    use_case: ListScheduleSheetsUseCase = Depends(ListScheduleSheetsUseCase.depends),
) -> List[SheetAvailabilityResponse]:
    seats = await use_case.execute(schedule_id=schedule_id, date=date, movie_id=movie_id)
    return [
        SheetAvailabilityResponse(
            id=seat.sheet.id or 0,
            row=seat.sheet.row,
            column=seat.sheet.column,
            label=seat.sheet.label,
            reserved=seat.reserved,
        )
        for seat in seats
    ]
