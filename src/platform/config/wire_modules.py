"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.query import (
    check_availability_use_case,
    list_schedule_sheets_use_case,
    prepare_reservation_use_case,
)
from src.service.cinema.driving_adapter.http_controller.auth import current_user


WIRE_MODULES: list[ModuleType] = [
    check_availability_use_case,
    prepare_reservation_use_case,
    list_schedule_sheets_use_case,
    current_user,
]
