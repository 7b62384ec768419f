from abc import ABC, abstractmethod
from datetime import date
from typing import Set


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def exists(self, *, schedule_id: int, sheet_id: int, date: date) -> bool:
        """
        Whether a reservation already holds the (schedule, sheet, date) triple

        Raises:
            StoreUnavailableError: the store could not be queried
        """
        pass

    @abstractmethod
    async def list_reserved_sheet_ids(self, *, schedule_id: int, date: date) -> Set[int]:
        pass
