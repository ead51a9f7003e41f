"""
Book Seats Use Case

Flow:
1. Resolve the showtime by its `ST_<index>` id
2. Under the showtime lock: validate and book every seat (Reservation.create)
3. Still under the showtime lock: register the reservation in the store (store lock)
4. Persist the snapshot and record metrics outside both locks

Lock order is showtime -> store, matching CancelReservationUseCase, so the two
paths can never deadlock against each other.
"""

from typing import Optional, Sequence

from opentelemetry import trace

from src.platform.exception.exceptions import NotFoundError, ValidationFailedError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import BookingMetrics
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.domain.value_object.payment_details import PaymentDetails
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class BookSeatsUseCase:
    def __init__(
        self,
        *,
        store: InMemoryStore,
        metrics: BookingMetrics,
        max_seats_per_booking: int,
    ) -> None:
        self.store = store
        self.metrics = metrics
        self.max_seats_per_booking = max_seats_per_booking
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    def execute(
        self,
        *,
        user: User,
        showtime_id: str,
        positions: Sequence[tuple[int, int]],
        payment: Optional[PaymentDetails] = None,
    ) -> Reservation:
        """
        Book all `positions` (0-based) for `user`, or none of them.

        Raises:
            NotFoundError: unknown showtime id
            ValidationFailedError: empty request or more seats than allowed
            ExpiredWindowError / ConflictError / SeatOutOfRangeError: from Reservation.create
        """
        with self.tracer.start_as_current_span(
            'use_case.book_seats',
            attributes={
                'showtime.id': showtime_id,
                'user.name': user.username,
                'seat.count': len(positions),
            },
        ):
            if len(positions) > self.max_seats_per_booking:
                raise ValidationFailedError(
                    f'At most {self.max_seats_per_booking} seats per booking'
                )

            showtime = self.store.find_showtime_by_id(showtime_id)
            if showtime is None:
                raise NotFoundError('Showtime not found')

            with showtime.lock:
                reservation = Reservation.create(
                    user=user, showtime=showtime, positions=positions, payment=payment
                )
                self.store.add_reservation(reservation)

            self.store.persist()
            self.metrics.record_booking_created(seat_count=len(reservation.booked_seats))

            Logger.base.info(
                f'[BOOK] {user.username} booked {reservation.wire_seat_list()} on {showtime_id} '
                f'(booking={reservation.booking_id}, total={reservation.get_total_price():.2f})'
            )
            Logger.base.debug(f'[BOOK] Receipt\n{reservation.summary()}')
            return reservation
