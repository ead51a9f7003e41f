"""Cinema Domain Enums"""

from src.service.cinema.domain.enum.seat_state import SeatState

__all__ = ['SeatState']
