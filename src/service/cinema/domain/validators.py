"""
Cinema domain validation.

Validators return every field-level problem at once instead of raising on
the first one, so callers can report all of them to the user.
"""

from typing import Any, List

import attrs

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.reservation_entity import (
    HOLDER_EMAIL_MAX_LENGTH,
    HOLDER_NAME_MAX_LENGTH,
    Reservation,
)


@attrs.define(frozen=True)
class FieldError:
    field: str
    message: str


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _require(errors: List[FieldError], field: str, value: Any) -> None:
    if _is_blank(value):
        errors.append(FieldError(field=field, message=f"{field} can't be blank"))


def _limit(errors: List[FieldError], field: str, value: Any, max_length: int) -> None:
    if isinstance(value, str) and len(value) > max_length:
        errors.append(
            FieldError(
                field=field, message=f'{field} is too long (maximum is {max_length} characters)'
            )
        )


def validate_reservation(reservation: Reservation) -> List[FieldError]:
    errors: List[FieldError] = []
    _require(errors, 'schedule_id', reservation.schedule_id)
    _require(errors, 'sheet_id', reservation.sheet_id)
    _require(errors, 'date', reservation.date)
    _require(errors, 'name', reservation.name)
    _require(errors, 'email', reservation.email)
    _require(errors, 'user_id', reservation.user_id)
    _limit(errors, 'name', reservation.name, HOLDER_NAME_MAX_LENGTH)
    _limit(errors, 'email', reservation.email, HOLDER_EMAIL_MAX_LENGTH)

    if not _is_blank(reservation.email) and '@' not in reservation.email:
        errors.append(FieldError(field='email', message='email is invalid'))

    return errors


def validate_movie(movie: Movie) -> List[FieldError]:
    errors: List[FieldError] = []
    _require(errors, 'name', movie.name)
    _require(errors, 'year', movie.year)
    _require(errors, 'description', movie.description)
    _require(errors, 'image_url', movie.image_url)

    if not isinstance(movie.is_showing, bool):
        errors.append(FieldError(field='is_showing', message='is_showing must be true or false'))

    return errors
