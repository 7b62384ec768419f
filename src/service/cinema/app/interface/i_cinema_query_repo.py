from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.schedule_entity import Schedule
from src.service.cinema.domain.entity.sheet_entity import Sheet


class ICinemaQueryRepo(ABC):
    """Lookup by identifier for movies, schedules and sheets"""

    @abstractmethod
    async def get_movie_by_id(self, *, movie_id: int) -> Optional[Movie]:
        pass

    @abstractmethod
    async def get_schedule_by_id(self, *, schedule_id: int) -> Optional[Schedule]:
        pass

    @abstractmethod
    async def get_sheet_by_id(self, *, sheet_id: int) -> Optional[Sheet]:
        pass

    @abstractmethod
    async def get_sheet_in_screen(self, *, sheet_id: int, screen_id: int) -> Optional[Sheet]:
        pass

    @abstractmethod
    async def list_sheets_by_screen(self, *, screen_id: int) -> List[Sheet]:
        """Sheets of one screen ordered by (row, column)"""
        pass
