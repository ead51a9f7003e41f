"""
Protocol Codec

Request side: split a line into a command and its raw fields, and convert
typed fields (ints, prices, dates, 1-based `row:col` seats). Any malformed
field raises InvalidFormatError; an unknown command raises InvalidCommandError.

Response side: build the `|`-joined lines for every response shape. Seats go
back out 1-based; money is always rendered with two decimals.
"""

from datetime import datetime
import math
from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import InvalidCommandError, InvalidFormatError
from src.service.cinema.app.dto.listing_dto import BookingView, SeatMap, ShowtimeListing
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.value_object.payment_details import PaymentDetails
from src.service.cinema.driving_adapter.protocol.protocol_constant import (
    DATE_TIME_FORMAT,
    DELIMITER,
    END_LIST,
    END_SEATS,
    ERROR,
    SEAT_DELIMITER,
    SEAT_SEPARATOR,
    SUCCESS,
    Command,
)


@attrs.define(frozen=True)
class ParsedCommand:
    command: Command
    args: list[str]


@attrs.define(frozen=True)
class BookRequest:
    showtime_id: str
    positions: list[tuple[int, int]]  # 0-based
    payment: Optional[PaymentDetails]


# ========== Request parsing ==========


def parse_line(line: str) -> Optional[ParsedCommand]:
    """None for a blank line; the command token is case-insensitive"""
    line = line.strip('\r\n')
    if not line.strip():
        return None

    tokens = line.split(DELIMITER)
    name = tokens[0].strip().upper()
    try:
        command = Command(name)
    except ValueError:
        raise InvalidCommandError() from None
    # Free-text fields (passwords, card data) are kept verbatim
    return ParsedCommand(command=command, args=tokens[1:])


def require_args(args: list[str], *counts: int) -> list[str]:
    if len(args) not in counts:
        raise InvalidFormatError()
    return args


def parse_int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidFormatError() from None


def parse_price(token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise InvalidFormatError() from None
    if not math.isfinite(value):
        raise InvalidFormatError()
    return value


def parse_date_time(token: str) -> datetime:
    try:
        return datetime.strptime(token.strip(), DATE_TIME_FORMAT)
    except ValueError:
        raise InvalidFormatError() from None


def parse_seat(token: str) -> tuple[int, int]:
    """`row:col` (1-based on the wire) -> (row, col) 0-based"""
    parts = token.split(SEAT_DELIMITER)
    if len(parts) != 2:
        raise InvalidFormatError()
    row, col = parse_int(parts[0]), parse_int(parts[1])
    return row - 1, col - 1


def parse_book_request(args: list[str], *, max_seats: int) -> BookRequest:
    """
    BOOK|showtimeId|seatCount|seat*seatCount[|cardNumber|expiry|cvv]

    Out-of-grid seats (including 0 or negative wire coordinates) are not a format
    error here; the booking itself rejects them with their wire position.
    """
    if len(args) < 3:
        raise InvalidFormatError()

    showtime_id = args[0]
    seat_count = parse_int(args[1])
    if not 1 <= seat_count <= max_seats:
        raise InvalidFormatError()

    remaining = len(args) - 2 - seat_count
    if remaining not in (0, 3):
        raise InvalidFormatError()

    positions = [parse_seat(token) for token in args[2 : 2 + seat_count]]
    payment = None
    if remaining == 3:
        card_number, expiry, cvv = args[2 + seat_count :]
        payment = PaymentDetails(card_number=card_number, expiry=expiry, cvv=cvv)

    return BookRequest(showtime_id=showtime_id, positions=positions, payment=payment)


# ========== Response formatting ==========


def _field(value: object) -> str:
    # A field must never break the line framing
    text = '' if value is None else str(value)
    return text.replace(DELIMITER, '/').replace('\r', ' ').replace('\n', ' ')


def format_money(amount: float) -> str:
    return f'{amount:.2f}'


def format_date_time(value: datetime) -> str:
    return value.strftime(DATE_TIME_FORMAT)


def format_seat_list(positions: Iterable[tuple[int, int]]) -> str:
    return SEAT_SEPARATOR.join(f'{row + 1}{SEAT_DELIMITER}{col + 1}' for row, col in positions)


def success(*fields: object) -> str:
    return DELIMITER.join([SUCCESS, *(_field(f) for f in fields)])


def error(message: str) -> str:
    return DELIMITER.join([ERROR, _field(message)])


def format_movie(movie: Movie) -> str:
    # The title doubles as the movie id
    return DELIMITER.join(
        [
            'MOVIE',
            _field(movie.title),
            _field(movie.title),
            _field(movie.genre),
            _field(movie.rating),
            str(movie.runtime_minutes),
        ]
    )


def format_showtime(listing: ShowtimeListing) -> str:
    return DELIMITER.join(
        [
            'SHOWTIME',
            listing.showtime_id,
            format_date_time(listing.date_time),
            str(listing.available_seats),
            str(listing.total_seats),
            format_money(listing.dynamic_price),
            _field(listing.auditorium_name),
        ]
    )


def format_seat_rows(seat_map: SeatMap) -> list[str]:
    return [
        DELIMITER.join(['ROW', str(index + 1), *('1' if free else '0' for free in row)])
        for index, row in enumerate(seat_map.availability)
    ]


def format_booking(view: BookingView) -> str:
    return DELIMITER.join(
        [
            'BOOKING',
            view.booking_id,
            _field(view.movie_title),
            format_date_time(view.date_time),
            format_seat_list(view.seat_positions),
            format_money(view.total_price),
        ]
    )


def format_booking_detail(view: BookingView) -> str:
    return DELIMITER.join(
        [
            'BOOKING_DETAIL',
            view.booking_id,
            view.username,
            _field(view.movie_title),
            format_date_time(view.date_time),
            format_seat_list(view.seat_positions),
            format_money(view.total_price),
        ]
    )


def list_block(lines: list[str], *, terminator: str = END_LIST) -> list[str]:
    return [success(len(lines)), *lines, terminator]


def seats_block(seat_map: SeatMap) -> list[str]:
    return [success(seat_map.rows, seat_map.cols), *format_seat_rows(seat_map), END_SEATS]
