"""Read models returned by the query use cases, captured under the relevant locks."""

from datetime import datetime
from typing import Optional

import attrs


@attrs.define(frozen=True)
class ShowtimeListing:
    showtime_id: str
    date_time: datetime
    available_seats: int
    total_seats: int
    dynamic_price: float
    auditorium_name: Optional[str]


@attrs.define(frozen=True)
class SeatMap:
    rows: int
    cols: int
    availability: list[list[bool]]  # True = available


@attrs.define(frozen=True)
class BookingView:
    booking_id: str
    username: str
    movie_title: str
    date_time: datetime
    seat_positions: list[tuple[int, int]]  # 0-based
    total_price: float
