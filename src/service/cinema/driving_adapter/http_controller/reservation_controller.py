from datetime import date

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_reservation_use_case import CreateReservationUseCase
from src.service.cinema.app.dto.reservation_result import RejectionReason, ReservationResult
from src.service.cinema.app.query.check_availability_use_case import CheckAvailabilityUseCase
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)
from src.service.cinema.driving_adapter.http_controller.schema.reservation_schema import (
    AvailabilityResponse,
    FieldErrorResponse,
    ReservationCreateRequest,
    ReservationRejectedResponse,
    ReservationResponse,
)


router = APIRouter()

REJECTION_STATUS_CODES: dict[RejectionReason, int] = {
    RejectionReason.SEAT_ALREADY_BOOKED: status.HTTP_409_CONFLICT,
    RejectionReason.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    RejectionReason.SEAT_NOT_IN_SCREEN: status.HTTP_400_BAD_REQUEST,
    RejectionReason.STORE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _to_reservation_response(reservation: Reservation) -> ReservationResponse:
    if reservation.id is None or reservation.date is None or reservation.user_id is None:
        raise ValueError('Reservation should be persisted before building a response.')
    return ReservationResponse(
        id=reservation.id,
        schedule_id=reservation.schedule_id,
        sheet_id=reservation.sheet_id,
        date=reservation.date,
        name=reservation.name,
        email=reservation.email,
        user_id=reservation.user_id,
        created_at=reservation.created_at,
    )


def _to_rejected_response(result: ReservationResult) -> JSONResponse:
    if result.reason is None:
        raise ValueError('Only rejected results carry a reason.')
    body = ReservationRejectedResponse(
        detail=result.message,
        reason=result.reason.value,
        errors=[FieldErrorResponse(field=e.field, message=e.message) for e in result.errors],
    )
    return JSONResponse(
        status_code=REJECTION_STATUS_CODES[result.reason], content=body.model_dump()
    )


@router.get('/availability', response_model=AvailabilityResponse)
@Logger.io
async def check_availability(
    schedule_id: int,
    sheet_id: int,
    date: date,
    use_case: CheckAvailabilityUseCase = Depends(CheckAvailabilityUseCase.depends),
) -> AvailabilityResponse:
    availability = await use_case.execute(schedule_id=schedule_id, sheet_id=sheet_id, date=date)
    return AvailabilityResponse(
        schedule_id=schedule_id, sheet_id=sheet_id, date=date, status=availability.value
    )


@router.post(
    '',
    status_code=status.HTTP_201_CREATED,
    response_model=ReservationResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {'model': ReservationRejectedResponse},
        status.HTTP_409_CONFLICT: {'model': ReservationRejectedResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {'model': ReservationRejectedResponse},
    },
)
@Logger.io
async def create_reservation(
    request: ReservationCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReservationResponse | JSONResponse:
    result = await use_case.execute(
        user=current_user,
        schedule_id=request.schedule_id,
        sheet_id=request.sheet_id,
        date=request.date,
    )
    if not result.is_created or result.reservation is None:
        return _to_rejected_response(result)
    return _to_reservation_response(result.reservation)
