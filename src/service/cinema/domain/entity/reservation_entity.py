from datetime import date, datetime
from typing import Optional

import attrs

from src.service.cinema.domain.entity.user_entity import UserEntity


HOLDER_NAME_MAX_LENGTH = 50
HOLDER_EMAIL_MAX_LENGTH = 255


@attrs.define(frozen=True)
class Reservation:
    """
    Booking of one sheet for one schedule on one calendar date.

    At most one reservation exists per (schedule_id, sheet_id, date).
    Reservations are never modified after creation.
    """

    schedule_id: int
    sheet_id: int
    date: Optional[date]
    name: str
    email: str
    user_id: Optional[int]
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls, *, user: UserEntity, schedule_id: int, sheet_id: int, date: Optional[date]
    ) -> 'Reservation':
        # Holder name and email always come from the acting user, never from request input
        return cls(
            schedule_id=schedule_id,
            sheet_id=sheet_id,
            date=date,
            name=user.name,
            email=user.email,
            user_id=user.id,
        )
