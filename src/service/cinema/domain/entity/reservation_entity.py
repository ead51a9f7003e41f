from datetime import datetime
from typing import Optional, Sequence

import attrs
import uuid_utils

from src.platform.exception.exceptions import (
    ConflictError,
    ExpiredWindowError,
    SeatOutOfRangeError,
    ValidationFailedError,
)
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.domain.value_object.payment_details import PaymentDetails
from src.service.cinema.domain.value_object.seat import Seat


DATE_TIME_FORMAT = '%Y-%m-%d %H:%M'
SUMMARY_DATE_TIME_FORMAT = '%b %d, %Y at %I:%M%p'


@attrs.define(eq=False)
class Reservation:
    booking_id: str
    user: User = attrs.field(repr=False)
    showtime: Showtime = attrs.field(repr=False)
    booked_seats: list[Seat]
    booking_time: datetime
    payment: PaymentDetails = attrs.field(factory=PaymentDetails, repr=False)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user: User,
        showtime: Showtime,
        positions: Sequence[tuple[int, int]],
        payment: Optional[PaymentDetails] = None,
        now: Optional[datetime] = None,
    ) -> 'Reservation':
        """
        Book every requested seat as one unit.

        All checks run under the showtime lock before the first cell is touched,
        so a rejected request leaves the grid exactly as it was.

        Args:
            positions: 0-based (row, col) pairs

        Raises:
            ExpiredWindowError: showtime already started
            ConflictError: duplicate position in the request, or seat already booked
            SeatOutOfRangeError: position outside the grid
        """
        if not positions:
            raise ValidationFailedError('At least one seat is required')

        now = now or datetime.now()
        with showtime.lock:
            if showtime.has_started(now):
                raise ExpiredWindowError()

            if len(set(positions)) != len(positions):
                raise ConflictError('Duplicate seat selection detected')

            for row, col in positions:
                if not showtime.in_range(row, col):
                    raise SeatOutOfRangeError(f'Seat {row + 1}:{col + 1} is out of range')

            for row, col in positions:
                if not showtime.is_seat_available(row, col):
                    raise ConflictError(f'Seat {row + 1}:{col + 1} is already booked')

            # Every seat in one request is charged the pre-booking dynamic price
            price = showtime.dynamic_price()
            seats = [Seat(row=row, col=col, price=price) for row, col in positions]
            for seat in seats:
                showtime.book_seat(seat.row, seat.col)
                seat.book()

        return cls(
            booking_id=str(uuid_utils.uuid7()),
            user=user,
            showtime=showtime,
            booked_seats=seats,
            booking_time=now,
            payment=payment or PaymentDetails(),
        )

    @classmethod
    def restore(
        cls,
        *,
        booking_id: str,
        user: User,
        showtime: Showtime,
        seats: list[Seat],
        booking_time: datetime,
        payment: PaymentDetails,
    ) -> 'Reservation':
        """Rebuild a persisted reservation and re-occupy its grid cells (no time gate)."""
        with showtime.lock:
            for seat in seats:
                if not showtime.book_seat(seat.row, seat.col):
                    raise ConflictError(
                        f'Snapshot claims seat {seat.wire_position} twice on one showtime'
                    )
                seat.booked = True
        return cls(
            booking_id=booking_id,
            user=user,
            showtime=showtime,
            booked_seats=seats,
            booking_time=booking_time,
            payment=payment,
        )

    def get_total_price(self) -> float:
        return sum(seat.price for seat in self.booked_seats)

    @Logger.io
    def cancel_all_seats(self) -> None:
        with self.showtime.lock:
            for seat in self.booked_seats:
                self.showtime.cancel_seat(seat.row, seat.col)
                seat.cancel()
            self.booked_seats.clear()

    @property
    def seat_positions(self) -> list[tuple[int, int]]:
        return [seat.position for seat in self.booked_seats]

    def wire_seat_list(self) -> str:
        return ','.join(seat.wire_position for seat in self.booked_seats)

    def summary(self) -> str:
        seat_list = ', '.join(seat.label for seat in self.booked_seats)
        return '\n'.join(
            (
                '-----------------------------',
                f'Booking ID: {self.booking_id}',
                f'Movie: {self.showtime.movie.title}',
                f'Showtime: {self.showtime.date_time.strftime(SUMMARY_DATE_TIME_FORMAT)}',
                f'Auditorium: {self.showtime.auditorium_name or "-"}',
                f'Seats: {seat_list}',
                f'Total Cost: ${self.get_total_price():.2f}',
                '-----------------------------',
            )
        )
