"""
Seat Availability Enum - Domain Value Object

Outcome of the availability check for a (schedule, sheet, date) triple.
"""

from enum import StrEnum


class Availability(StrEnum):
    AVAILABLE = 'available'
    TAKEN = 'taken'

    @classmethod
    def from_reserved(cls, reserved: bool) -> 'Availability':
        return cls.TAKEN if reserved else cls.AVAILABLE
