"""
Command Dispatcher

Maps one parsed request to a use case and renders the response block.
Holds no connection state itself; the caller passes the SessionContext that
carries the logged-in user for its connection.

Check order per command: access level first, then field format, then the
use case's own validation.
"""

from typing import Callable, Optional

import attrs
from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.add_movie_use_case import AddMovieUseCase
from src.service.cinema.app.command.add_showtime_use_case import AddShowtimeUseCase
from src.service.cinema.app.command.book_seats_use_case import BookSeatsUseCase
from src.service.cinema.app.command.cancel_reservation_use_case import CancelReservationUseCase
from src.service.cinema.app.command.promote_user_use_case import PromoteUserUseCase
from src.service.cinema.app.command.register_user_use_case import RegisterUserUseCase
from src.service.cinema.app.query.authenticate_user_use_case import AuthenticateUserUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.app.query.view_seats_use_case import ViewSeatsUseCase
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driving_adapter.protocol import protocol_codec as codec
from src.service.cinema.driving_adapter.protocol.protocol_constant import Command
from src.service.cinema.driving_adapter.protocol.role_auth import authorize


@attrs.define
class SessionContext:
    """Per-connection state: Unauthenticated while `user` is None"""

    peer: str = ''
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


class CommandDispatcher:
    def __init__(
        self,
        *,
        authenticate_user: AuthenticateUserUseCase,
        register_user: RegisterUserUseCase,
        list_movies: ListMoviesUseCase,
        list_showtimes: ListShowtimesUseCase,
        view_seats: ViewSeatsUseCase,
        book_seats: BookSeatsUseCase,
        cancel_reservation: CancelReservationUseCase,
        list_bookings: ListBookingsUseCase,
        add_movie: AddMovieUseCase,
        add_showtime: AddShowtimeUseCase,
        promote_user: PromoteUserUseCase,
        max_seats_per_booking: int,
    ) -> None:
        self.authenticate_user = authenticate_user
        self.register_user = register_user
        self.list_movies = list_movies
        self.list_showtimes = list_showtimes
        self.view_seats = view_seats
        self.book_seats = book_seats
        self.cancel_reservation = cancel_reservation
        self.list_bookings = list_bookings
        self.add_movie = add_movie
        self.add_showtime = add_showtime
        self.promote_user = promote_user
        self.max_seats_per_booking = max_seats_per_booking

        self._handlers: dict[
            Command, Callable[[SessionContext, Optional[User], list[str]], list[str]]
        ] = {
            Command.LOGIN: self._login,
            Command.REGISTER: self._register,
            Command.LOGOUT: self._logout,
            Command.LIST_MOVIES: self._list_movies,
            Command.LIST_SHOWTIMES: self._list_showtimes,
            Command.VIEW_SEATS: self._view_seats,
            Command.BOOK: self._book,
            Command.CANCEL: self._cancel,
            Command.MY_BOOKINGS: self._my_bookings,
            Command.ADMIN_ADD_MOVIE: self._admin_add_movie,
            Command.ADMIN_ADD_SHOWTIME: self._admin_add_showtime,
            Command.ADMIN_PROMOTE: self._admin_promote,
            Command.ADMIN_VIEW_ALL_BOOKINGS: self._admin_view_all_bookings,
        }

    def dispatch(self, session: SessionContext, parsed: codec.ParsedCommand) -> list[str]:
        """Run one command; CustomBaseError propagates for the caller to render"""
        acting_user = authorize(parsed.command, session.user)
        return self._handlers[parsed.command](session, acting_user, parsed.args)

    # ========== Account ==========

    def _login(self, session: SessionContext, _: Optional[User], args: list[str]) -> list[str]:
        username, password = codec.require_args(args, 2)
        user = self.authenticate_user.execute(username=username, password=SecretStr(password))
        session.user = user
        Logger.base.info(f'[SESSION] {session.peer} logged in as {user.username}')
        return [codec.success(f'Welcome {user.username}!', str(user.is_admin).lower())]

    def _register(self, session: SessionContext, _: Optional[User], args: list[str]) -> list[str]:
        username, password, email = codec.require_args(args, 3)
        self.register_user.execute(username=username, password=SecretStr(password), email=email)
        return [codec.success('Account created successfully')]

    def _logout(self, session: SessionContext, _: Optional[User], args: list[str]) -> list[str]:
        codec.require_args(args, 0)
        if session.user is not None:
            Logger.base.info(f'[SESSION] {session.peer} logged out ({session.user.username})')
        session.user = None
        return [codec.success('Logged out successfully')]

    # ========== Catalog (public) ==========

    def _list_movies(
        self, session: SessionContext, _: Optional[User], args: list[str]
    ) -> list[str]:
        codec.require_args(args, 0)
        return codec.list_block([codec.format_movie(m) for m in self.list_movies.execute()])

    def _list_showtimes(
        self, session: SessionContext, _: Optional[User], args: list[str]
    ) -> list[str]:
        (movie_title,) = codec.require_args(args, 1)
        listings = self.list_showtimes.execute(movie_title=movie_title)
        return codec.list_block([codec.format_showtime(listing) for listing in listings])

    def _view_seats(self, session: SessionContext, _: Optional[User], args: list[str]) -> list[str]:
        (showtime_id,) = codec.require_args(args, 1)
        return codec.seats_block(self.view_seats.execute(showtime_id=showtime_id))

    # ========== Bookings ==========

    def _book(self, session: SessionContext, user: Optional[User], args: list[str]) -> list[str]:
        request = codec.parse_book_request(args, max_seats=self.max_seats_per_booking)
        reservation = self.book_seats.execute(
            user=user,
            showtime_id=request.showtime_id,
            positions=request.positions,
            payment=request.payment,
        )
        return [
            codec.success(
                reservation.booking_id,
                codec.format_money(reservation.get_total_price()),
                'Booking confirmed',
            )
        ]

    def _cancel(self, session: SessionContext, user: Optional[User], args: list[str]) -> list[str]:
        (booking_id,) = codec.require_args(args, 1)
        self.cancel_reservation.execute(user=user, booking_id=booking_id)
        return [codec.success('Reservation cancelled')]

    def _my_bookings(
        self, session: SessionContext, user: Optional[User], args: list[str]
    ) -> list[str]:
        codec.require_args(args, 0)
        views = self.list_bookings.list_user_bookings(user=user)
        return codec.list_block([codec.format_booking(v) for v in views])

    # ========== Admin ==========

    def _admin_add_movie(
        self, session: SessionContext, _: Optional[User], args: list[str]
    ) -> list[str]:
        title, genre, rating, runtime = codec.require_args(args, 4)
        self.add_movie.execute(
            title=title, genre=genre, rating=rating, runtime_minutes=codec.parse_int(runtime)
        )
        return [codec.success('Movie added')]

    def _admin_add_showtime(
        self, session: SessionContext, _: Optional[User], args: list[str]
    ) -> list[str]:
        fields = codec.require_args(args, 5, 6)
        movie_title, date_time, rows, cols, base_price = fields[:5]
        auditorium = fields[5] if len(fields) == 6 else None
        showtime_id, _showtime = self.add_showtime.execute(
            movie_title=movie_title,
            date_time=codec.parse_date_time(date_time),
            rows=codec.parse_int(rows),
            cols=codec.parse_int(cols),
            base_price=codec.parse_price(base_price),
            auditorium_name=auditorium,
        )
        return [codec.success('Showtime added', showtime_id)]

    def _admin_promote(
        self, session: SessionContext, _: Optional[User], args: list[str]
    ) -> list[str]:
        (username,) = codec.require_args(args, 1)
        self.promote_user.execute(username=username)
        return [codec.success('User promoted to admin')]

    def _admin_view_all_bookings(
        self, session: SessionContext, _: Optional[User], args: list[str]
    ) -> list[str]:
        codec.require_args(args, 0)
        views = self.list_bookings.list_all_bookings()
        return codec.list_block([codec.format_booking_detail(v) for v in views])
