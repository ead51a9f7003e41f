"""
Seat Value Object

A seat record as held by a Reservation: position plus the price captured at
booking time. Live availability for a showtime is tracked by its SeatGrid,
so the `booked` flag here only describes this standalone record.
"""

import attrs


def _row_letter(row: int) -> str:
    letters = ''
    n = row
    while True:
        letters = chr(ord('A') + n % 26) + letters
        n = n // 26 - 1
        if n < 0:
            return letters


@attrs.define
class Seat:
    row: int = attrs.field(validator=attrs.validators.ge(0))
    col: int = attrs.field(validator=attrs.validators.ge(0))
    price: float = attrs.field(default=0.0, validator=attrs.validators.ge(0))
    booked: bool = False

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col

    @property
    def label(self) -> str:
        """Human label, e.g. row 0 col 0 -> 'A1', row 27 col 4 -> 'AB5'"""
        return f'{_row_letter(self.row)}{self.col + 1}'

    @property
    def wire_position(self) -> str:
        """1-based `row:col` as used on the wire"""
        return f'{self.row + 1}:{self.col + 1}'

    def book(self) -> bool:
        if self.booked:
            return False
        self.booked = True
        return True

    def cancel(self) -> bool:
        if not self.booked:
            return False
        self.booked = False
        return True

    def set_price(self, price: float) -> None:
        if price < 0:
            raise ValueError('price cannot be negative')
        self.price = price
