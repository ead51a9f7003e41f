"""
Showtime Entity

One scheduled screening: a movie, a start time, a SeatGrid and pricing.
The showtime is the unit of concurrency control for seat booking; its `lock`
guards the grid and is always acquired before the store lock.
"""

from datetime import datetime, timedelta
import threading
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationFailedError
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.seat_grid import SeatGrid


def _non_negative_price(instance: 'Showtime', attribute: attrs.Attribute, value: float) -> None:
    if value < 0:
        raise ValidationFailedError('Base price cannot be negative')


@attrs.define(eq=False)
class Showtime:
    movie: Movie
    date_time: datetime
    rows: int
    cols: int
    base_price: float = attrs.field(validator=_non_negative_price)
    auditorium_name: Optional[str] = None
    lock: threading.RLock = attrs.field(factory=threading.RLock, init=False, repr=False)
    grid: SeatGrid = attrs.field(init=False, repr=False)

    def __attrs_post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValidationFailedError('Rows and columns must be positive')
        self.grid = SeatGrid(rows=self.rows, cols=self.cols, lock=self.lock)

    # ========== Seat state ==========

    def book_seat(self, row: int, col: int) -> bool:
        return self.grid.book(row, col)

    def cancel_seat(self, row: int, col: int) -> bool:
        return self.grid.cancel(row, col)

    def is_seat_available(self, row: int, col: int) -> bool:
        return self.grid.is_available(row, col)

    def in_range(self, row: int, col: int) -> bool:
        return self.grid.in_range(row, col)

    @property
    def total_seats(self) -> int:
        return self.grid.total_seats

    def available_seat_count(self) -> int:
        return self.grid.available_count()

    def booked_seat_count(self) -> int:
        return self.grid.booked_count()

    def seat_map(self) -> list[list[bool]]:
        return self.grid.availability_rows()

    # ========== Pricing ==========

    def occupancy_ratio(self) -> float:
        with self.lock:
            return self.grid.booked_count() / self.grid.total_seats

    def dynamic_price(self) -> float:
        """basePrice * (1 + bookedCount / totalSeats), evaluated now"""
        return self.base_price * (1 + self.occupancy_ratio())

    def set_base_price(self, price: float) -> None:
        if price < 0:
            raise ValidationFailedError('Base price cannot be negative')
        with self.lock:
            self.base_price = price

    # ========== Schedule ==========

    def has_started(self, now: Optional[datetime] = None) -> bool:
        return self.date_time <= (now or datetime.now())

    @property
    def end_time(self) -> datetime:
        return self.date_time + timedelta(minutes=max(self.movie.runtime_minutes, 1))

    def overlaps(self, *, start: datetime, runtime_minutes: int) -> bool:
        end = start + timedelta(minutes=max(runtime_minutes, 1))
        return start < self.end_time and self.date_time < end
