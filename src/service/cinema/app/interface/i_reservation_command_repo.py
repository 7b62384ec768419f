"""
Reservation Command Repository Interface

The write side of the admission check. The store is the source of truth
for seat uniqueness: implementations must back `create` with an atomic
uniqueness guarantee over (schedule_id, sheet_id, date).
"""

from abc import ABC, abstractmethod

from src.service.cinema.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        """
        Insert a reservation

        Args:
            reservation: Reservation entity without id

        Returns:
            Reservation entity with id and created_at populated

        Raises:
            SeatAlreadyBookedError: the triple is already reserved
            StoreUnavailableError: any other store failure
        """
        pass
