"""
Seat Grid

Boolean availability matrix owned by one Showtime (True = booked).

Every operation runs under the lock handed in by the owning Showtime, so two
threads racing on the same cell get exactly one success. Coordinates are
0-based and validated on every call; nothing is clamped.
"""

import threading
from typing import Iterator, Optional

from src.platform.exception.exceptions import SeatOutOfRangeError
from src.service.cinema.domain.enum.seat_state import SeatState


class SeatGrid:
    def __init__(self, *, rows: int, cols: int, lock: Optional[threading.RLock] = None) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError('rows and cols must be positive')
        self.rows = rows
        self.cols = cols
        self._lock = lock or threading.RLock()
        self._booked = [[False] * cols for _ in range(rows)]

    def _validate(self, row: int, col: int) -> None:
        if not 0 <= row < self.rows:
            raise SeatOutOfRangeError(f'row out of bounds: {row}')
        if not 0 <= col < self.cols:
            raise SeatOutOfRangeError(f'col out of bounds: {col}')

    def in_range(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def book(self, row: int, col: int) -> bool:
        with self._lock:
            self._validate(row, col)
            if self._booked[row][col]:
                return False
            self._booked[row][col] = True
            return True

    def cancel(self, row: int, col: int) -> bool:
        with self._lock:
            self._validate(row, col)
            if not self._booked[row][col]:
                return False
            self._booked[row][col] = False
            return True

    def state(self, row: int, col: int) -> SeatState:
        with self._lock:
            self._validate(row, col)
            return SeatState.BOOKED if self._booked[row][col] else SeatState.AVAILABLE

    def is_available(self, row: int, col: int) -> bool:
        return self.state(row, col) is SeatState.AVAILABLE

    @property
    def total_seats(self) -> int:
        return self.rows * self.cols

    def available_count(self) -> int:
        with self._lock:
            return sum(1 for row in self._booked for cell in row if not cell)

    def booked_count(self) -> int:
        return self.total_seats - self.available_count()

    def booked_positions(self) -> Iterator[tuple[int, int]]:
        with self._lock:
            cells = [
                (r, c) for r in range(self.rows) for c in range(self.cols) if self._booked[r][c]
            ]
        return iter(cells)

    def availability_rows(self) -> list[list[bool]]:
        """Copy of the grid as availability flags (True = available)"""
        with self._lock:
            return [[not cell for cell in row] for row in self._booked]
