"""
List Bookings Use Case

Views are captured under the store lock. Cancellation clears a reservation's
seats inside that same lock, so a listed booking always shows its full seat set.
"""

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.listing_dto import BookingView
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class ListBookingsUseCase:
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    def list_user_bookings(self, *, user: User) -> list[BookingView]:
        with self.store.lock:
            return [
                self._to_view(r)
                for r in self.store.get_reservations()
                if r.user.username == user.username
            ]

    @Logger.io
    def list_all_bookings(self) -> list[BookingView]:
        with self.store.lock:
            return [self._to_view(r) for r in self.store.get_reservations()]

    @staticmethod
    def _to_view(reservation: Reservation) -> BookingView:
        return BookingView(
            booking_id=reservation.booking_id,
            username=reservation.user.username,
            movie_title=reservation.showtime.movie.title,
            date_time=reservation.showtime.date_time,
            seat_positions=reservation.seat_positions,
            total_price=reservation.get_total_price(),
        )
