"""Application layer DTOs"""

from src.service.cinema.app.dto.listing_dto import BookingView, SeatMap, ShowtimeListing

__all__ = ['BookingView', 'SeatMap', 'ShowtimeListing']
