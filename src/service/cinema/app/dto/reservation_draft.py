"""Read models for the seat-selection and confirmation steps."""

from datetime import date

import attrs

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.schedule_entity import Schedule
from src.service.cinema.domain.entity.sheet_entity import Sheet
from src.service.cinema.domain.enum.availability import Availability


@attrs.define(frozen=True)
class ReservationDraft:
    """Everything the confirmation step shows before the user commits a reservation"""

    movie: Movie
    schedule: Schedule
    sheet: Sheet
    date: date
    availability: Availability


@attrs.define(frozen=True)
class SheetAvailability:
    sheet: Sheet
    reserved: bool
