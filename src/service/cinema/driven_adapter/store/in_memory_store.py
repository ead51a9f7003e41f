"""
In-Memory Store

Shared registry of users, movies, showtimes and reservations.

Locking:
- One store-wide RLock serializes every mutating or multi-step read
- Seat grids are NOT covered here; each Showtime carries its own lock
- Lock order is always showtime lock -> store lock, never the reverse

Lookups are linear scans on natural keys (username, title, booking id).
Showtime ids are `ST_<index>` into the showtime list; showtimes are never removed.
"""

from datetime import datetime
import threading
from typing import Callable, Optional

from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_snapshot_repo import ISnapshotRepo, StoreState
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.user_entity import User


SHOWTIME_ID_PREFIX = 'ST_'


class InMemoryStore:
    def __init__(self, *, snapshot_repo: Optional[ISnapshotRepo] = None) -> None:
        self._snapshot_repo = snapshot_repo
        self._lock = threading.RLock()
        self._users: list[User] = []
        self._movies: list[Movie] = []
        self._showtimes: list[Showtime] = []
        self._reservations: list[Reservation] = []

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    # ========== Users ==========

    def get_users(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def add_user(self, user: User) -> None:
        with self._lock:
            if self.find_user(user.username) is not None:
                raise ConflictError('Username already exists')
            self._users.append(user)

    def ensure_user(self, username: str, factory: Callable[[], User]) -> bool:
        """Insert `factory()` when `username` is absent; True if a user was created"""
        with self._lock:
            if self.find_user(username) is not None:
                return False
            self._users.append(factory())
            return True

    def remove_user(self, username: str) -> bool:
        with self._lock:
            user = self.find_user(username)
            if user is None:
                return False
            if user.reservations:
                raise ConflictError('User has active reservations')
            self._users.remove(user)
            return True

    def find_user(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users:
                if user.username == username:
                    return user
            return None

    def username_exists(self, username: str) -> bool:
        return self.find_user(username) is not None

    @Logger.io
    def promote_user_to_admin(self, username: str) -> User:
        with self._lock:
            user = self.find_user(username)
            if user is None:
                raise NotFoundError('User not found')
            if user.is_admin:
                raise ConflictError('User is already an admin')
            user.promote()
            return user

    # ========== Movies ==========

    def get_movies(self) -> list[Movie]:
        with self._lock:
            return list(self._movies)

    def add_movie(self, movie: Movie) -> None:
        with self._lock:
            if self.find_movie(movie.title) is not None:
                raise ConflictError('Movie already exists')
            self._movies.append(movie)

    def remove_movie(self, title: str) -> bool:
        with self._lock:
            movie = self.find_movie(title)
            if movie is None:
                return False
            if any(s.movie.title == title for s in self._showtimes):
                raise ConflictError('Movie has scheduled showtimes')
            self._movies.remove(movie)
            return True

    def find_movie(self, title: str) -> Optional[Movie]:
        with self._lock:
            for movie in self._movies:
                if movie.title == title:
                    return movie
            return None

    def movie_exists(self, title: str) -> bool:
        return self.find_movie(title) is not None

    # ========== Showtimes ==========

    def get_showtimes(self) -> list[Showtime]:
        with self._lock:
            return list(self._showtimes)

    def add_showtime(self, showtime: Showtime) -> str:
        with self._lock:
            if self.find_movie(showtime.movie.title) is None:
                raise NotFoundError('Movie not found')
            if self.is_showtime_conflict(
                showtime.movie, showtime.date_time, showtime.auditorium_name
            ):
                raise ConflictError('Showtime conflicts with an existing screening')
            self._showtimes.append(showtime)
            return f'{SHOWTIME_ID_PREFIX}{len(self._showtimes) - 1}'

    def find_showtime(self, movie: Movie, date_time: datetime) -> Optional[Showtime]:
        with self._lock:
            for showtime in self._showtimes:
                if showtime.movie.title == movie.title and showtime.date_time == date_time:
                    return showtime
            return None

    def find_showtime_by_id(self, showtime_id: str) -> Optional[Showtime]:
        if not showtime_id.startswith(SHOWTIME_ID_PREFIX):
            return None
        index_str = showtime_id[len(SHOWTIME_ID_PREFIX) :]
        if not index_str.isdecimal():
            return None
        index = int(index_str)
        with self._lock:
            if index >= len(self._showtimes):
                return None
            return self._showtimes[index]

    def showtime_id(self, showtime: Showtime) -> str:
        with self._lock:
            for index, candidate in enumerate(self._showtimes):
                if candidate is showtime:
                    return f'{SHOWTIME_ID_PREFIX}{index}'
        raise NotFoundError('Showtime not found')

    def showtimes_for_movie(self, title: str) -> list[tuple[str, Showtime]]:
        with self._lock:
            return [
                (f'{SHOWTIME_ID_PREFIX}{index}', showtime)
                for index, showtime in enumerate(self._showtimes)
                if showtime.movie.title == title
            ]

    def is_showtime_conflict(
        self, movie: Movie, date_time: datetime, auditorium_name: Optional[str] = None
    ) -> bool:
        with self._lock:
            for showtime in self._showtimes:
                if showtime.movie.title == movie.title and showtime.date_time == date_time:
                    return True
                if (
                    auditorium_name
                    and showtime.auditorium_name == auditorium_name
                    and showtime.overlaps(start=date_time, runtime_minutes=movie.runtime_minutes)
                ):
                    return True
            return False

    # ========== Reservations ==========

    def get_reservations(self) -> list[Reservation]:
        with self._lock:
            return list(self._reservations)

    def add_reservation(self, reservation: Reservation) -> None:
        with self._lock:
            self._reservations.append(reservation)
            reservation.user.add_reservation(reservation)

    def remove_reservation(self, booking_id: str) -> Optional[Reservation]:
        with self._lock:
            reservation = self.find_reservation(booking_id)
            if reservation is None:
                return None
            self._reservations.remove(reservation)
            reservation.user.remove_reservation(booking_id)
            return reservation

    def find_reservation(self, booking_id: str) -> Optional[Reservation]:
        with self._lock:
            for reservation in self._reservations:
                if reservation.booking_id == booking_id:
                    return reservation
            return None

    # ========== Lifecycle ==========

    def clear_all(self) -> None:
        with self._lock:
            self._users.clear()
            self._movies.clear()
            self._showtimes.clear()
            self._reservations.clear()

    def persist(self) -> bool:
        """Write a full snapshot; failures are logged and never raised"""
        if self._snapshot_repo is None:
            return False
        with self._lock:
            state = StoreState(
                users=list(self._users),
                movies=list(self._movies),
                showtimes=list(self._showtimes),
                reservations=list(self._reservations),
            )
            try:
                self._snapshot_repo.save(state=state)
            except (OSError, TypeError, ValueError) as e:
                Logger.base.error(f'[STORE] Snapshot write failed, memory state kept: {e}')
                return False
        Logger.base.debug(f'[STORE] Snapshot written ({len(state.reservations)} reservations)')
        return True

    @Logger.io
    def restore(self) -> bool:
        """Replace the content with the latest snapshot; False when none exists"""
        if self._snapshot_repo is None:
            return False
        state = self._snapshot_repo.load()
        if state is None:
            Logger.base.info('[STORE] No snapshot found, starting empty')
            return False
        with self._lock:
            self._users = list(state.users)
            self._movies = list(state.movies)
            self._showtimes = list(state.showtimes)
            self._reservations = list(state.reservations)
        Logger.base.info(
            f'[STORE] Restored {len(state.users)} users, {len(state.movies)} movies, '
            f'{len(state.showtimes)} showtimes, {len(state.reservations)} reservations'
        )
        return True
