"""Cinema Domain Enums"""

from src.service.cinema.domain.enum.availability import Availability

__all__ = ['Availability']
