"""Data Transfer Objects for the cinema application layer."""

from src.service.cinema.app.dto.reservation_draft import ReservationDraft, SheetAvailability
from src.service.cinema.app.dto.reservation_result import RejectionReason, ReservationResult

__all__ = ['RejectionReason', 'ReservationDraft', 'ReservationResult', 'SheetAvailability']
