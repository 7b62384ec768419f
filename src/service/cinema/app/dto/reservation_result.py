"""Reservation admission result DTO."""

from enum import StrEnum
from typing import Optional, Tuple

import attrs

from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.validators import FieldError


class RejectionReason(StrEnum):
    SEAT_ALREADY_BOOKED = 'seat_already_booked'
    VALIDATION_FAILED = 'validation_failed'
    SEAT_NOT_IN_SCREEN = 'seat_not_in_screen'
    STORE_FAILURE = 'store_failure'

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES = {
    RejectionReason.SEAT_ALREADY_BOOKED: 'seat already booked',
    RejectionReason.VALIDATION_FAILED: 'reservation is invalid',
    RejectionReason.SEAT_NOT_IN_SCREEN: 'sheet is not in the schedule screen',
    RejectionReason.STORE_FAILURE: 'reservation could not be saved',
}


@attrs.define(frozen=True)
class ReservationResult:
    """
    Outcome of CreateReservation: either Created (reservation set) or
    Rejected (reason set). Rejections are values, not exceptions.
    """

    reservation: Optional[Reservation] = None
    reason: Optional[RejectionReason] = None
    errors: Tuple[FieldError, ...] = ()

    @classmethod
    def created(cls, reservation: Reservation) -> 'ReservationResult':
        return cls(reservation=reservation)

    @classmethod
    def rejected(
        cls, reason: RejectionReason, errors: Tuple[FieldError, ...] = ()
    ) -> 'ReservationResult':
        return cls(reason=reason, errors=tuple(errors))

    @property
    def is_created(self) -> bool:
        return self.reservation is not None

    @property
    def reservation_id(self) -> Optional[int]:
        return self.reservation.id if self.reservation else None

    @property
    def message(self) -> str:
        return self.reason.message if self.reason else 'reservation created'
