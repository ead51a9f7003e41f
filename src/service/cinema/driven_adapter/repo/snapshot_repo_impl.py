"""
Snapshot Repository (orjson)

Storage Format:
    Single JSON document, rewritten in full after every mutating command.
    References are natural keys: reservation -> username + showtime index,
    showtime -> movie title. Grid state is not stored; restoring the
    reservations re-occupies their cells.

Example:
    {
        "users": [{"username": "alice", "password_hash": "$2b$...", "email": "a@b.com",
                   "is_admin": false}],
        "movies": [{"title": "Dune", "genre": "Sci-Fi", "rating": "PG-13", "runtime_minutes": 155,
                    "poster_path": null}],
        "showtimes": [{"movie_title": "Dune", "date_time": "2030-01-01T19:30:00", "rows": 3,
                       "cols": 4, "base_price": 10.0, "auditorium_name": "Hall 1"}],
        "reservations": [{"booking_id": "...", "username": "alice", "showtime_index": 0,
                          "seats": [{"row": 0, "col": 0, "price": 10.0}], "booking_time": "...",
                          "card_number": "...", "expiry": "...", "cvv": "..."}]
    }
"""

from datetime import datetime
import os
from pathlib import Path
from typing import Any, Optional

import orjson

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_snapshot_repo import ISnapshotRepo, StoreState
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.domain.value_object.payment_details import PaymentDetails
from src.service.cinema.domain.value_object.seat import Seat


class SnapshotRepoImpl(ISnapshotRepo):
    def __init__(self, *, path: Path) -> None:
        self.path = Path(path)

    # ========== Write ==========

    def save(self, *, state: StoreState) -> None:
        showtime_index = {id(showtime): i for i, showtime in enumerate(state.showtimes)}
        document = {
            'users': [self._dump_user(u) for u in state.users],
            'movies': [self._dump_movie(m) for m in state.movies],
            'showtimes': [self._dump_showtime(s) for s in state.showtimes],
            'reservations': [
                self._dump_reservation(r, showtime_index[id(r.showtime)])
                for r in state.reservations
            ],
        }
        payload = orjson.dumps(document, option=orjson.OPT_INDENT_2)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f'{self.path.name}.tmp')
        with open(tmp_path, 'wb') as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.path)

    @staticmethod
    def _dump_user(user: User) -> dict[str, Any]:
        return {
            'username': user.username,
            'password_hash': user.password_hash,
            'email': user.email,
            'is_admin': user.is_admin,
        }

    @staticmethod
    def _dump_movie(movie: Movie) -> dict[str, Any]:
        return {
            'title': movie.title,
            'genre': movie.genre,
            'rating': movie.rating,
            'runtime_minutes': movie.runtime_minutes,
            'poster_path': movie.poster_path,
        }

    @staticmethod
    def _dump_showtime(showtime: Showtime) -> dict[str, Any]:
        return {
            'movie_title': showtime.movie.title,
            'date_time': showtime.date_time,
            'rows': showtime.rows,
            'cols': showtime.cols,
            'base_price': showtime.base_price,
            'auditorium_name': showtime.auditorium_name,
        }

    @staticmethod
    def _dump_reservation(reservation: Reservation, showtime_index: int) -> dict[str, Any]:
        return {
            'booking_id': reservation.booking_id,
            'username': reservation.user.username,
            'showtime_index': showtime_index,
            'seats': [
                {'row': seat.row, 'col': seat.col, 'price': seat.price}
                for seat in reservation.booked_seats
            ],
            'booking_time': reservation.booking_time,
            'card_number': reservation.payment.card_number,
            'expiry': reservation.payment.expiry,
            'cvv': reservation.payment.cvv,
        }

    # ========== Read ==========

    @Logger.io
    def load(self) -> Optional[StoreState]:
        if not self.path.exists():
            return None

        document = orjson.loads(self.path.read_bytes())
        users = [
            User(
                username=u['username'],
                password_hash=u['password_hash'],
                email=u.get('email', ''),
                is_admin=u.get('is_admin', False),
            )
            for u in document.get('users', [])
        ]
        movies = [
            Movie(
                title=m['title'],
                genre=m.get('genre', ''),
                rating=m.get('rating', ''),
                runtime_minutes=m.get('runtime_minutes', 0),
                poster_path=m.get('poster_path'),
            )
            for m in document.get('movies', [])
        ]
        movies_by_title = {m.title: m for m in movies}
        users_by_name = {u.username: u for u in users}

        showtimes = []
        for s in document.get('showtimes', []):
            movie = movies_by_title.get(s['movie_title'])
            if movie is None:
                raise ValueError(f'Snapshot showtime references unknown movie {s["movie_title"]!r}')
            showtimes.append(
                Showtime(
                    movie=movie,
                    date_time=datetime.fromisoformat(s['date_time']),
                    rows=s['rows'],
                    cols=s['cols'],
                    base_price=s['base_price'],
                    auditorium_name=s.get('auditorium_name'),
                )
            )

        reservations = []
        for r in document.get('reservations', []):
            user = users_by_name.get(r['username'])
            if user is None:
                raise ValueError(f'Snapshot reservation references unknown user {r["username"]!r}')
            index = r['showtime_index']
            if not 0 <= index < len(showtimes):
                raise ValueError(f'Snapshot reservation references unknown showtime {index}')
            reservation = Reservation.restore(
                booking_id=r['booking_id'],
                user=user,
                showtime=showtimes[index],
                seats=[Seat(row=x['row'], col=x['col'], price=x['price']) for x in r['seats']],
                booking_time=datetime.fromisoformat(r['booking_time']),
                payment=PaymentDetails(
                    card_number=r.get('card_number', ''),
                    expiry=r.get('expiry', ''),
                    cvv=r.get('cvv', ''),
                ),
            )
            user.add_reservation(reservation)
            reservations.append(reservation)

        return StoreState(
            users=users, movies=movies, showtimes=showtimes, reservations=reservations
        )
