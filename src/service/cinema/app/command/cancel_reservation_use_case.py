from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class CancelReservationUseCase:
    """
    Cancel one of the caller's own reservations and free its seats.

    The reservation leaves the store and its cells are released inside the same
    showtime -> store critical section, so no reader ever sees a listed booking
    whose seats are already free.
    """

    def __init__(self, *, store: InMemoryStore, metrics: BookingMetrics) -> None:
        self.store = store
        self.metrics = metrics
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    def execute(self, *, user: User, booking_id: str) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.cancel_reservation',
            attributes={'booking.id': booking_id, 'user.name': user.username},
        ):
            reservation = self.store.find_reservation(booking_id)
            if reservation is None:
                raise NotFoundError('Booking not found')
            if reservation.user.username != user.username:
                raise ForbiddenError('Not authorized to cancel this booking')

            showtime = reservation.showtime
            with showtime.lock:
                with self.store.lock:
                    # A concurrent cancel may have won between lookup and lock
                    removed = self.store.remove_reservation(booking_id)
                    if removed is None:
                        raise NotFoundError('Booking not found')
                    released = list(removed.booked_seats)
                    removed.cancel_all_seats()

            self.store.persist()
            self.metrics.record_booking_cancelled()

            Logger.base.info(
                f'[CANCEL] {user.username} cancelled {booking_id} '
                f'({",".join(seat.wire_position for seat in released)})'
            )
            return removed
