from typing import Optional

import attrs

from src.service.cinema.domain.entity.sheet_entity import Sheet


@attrs.define
class Schedule:
    """One showtime of a movie in one screen"""

    movie_id: int
    screen_id: int
    id: Optional[int] = None

    def offers(self, sheet: Sheet) -> bool:
        """Only the seats of the schedule's own screen are bookable."""
        return sheet.screen_id == self.screen_id

    def belongs_to(self, movie_id: int) -> bool:
        return self.movie_id == movie_id
