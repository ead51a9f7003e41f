from datetime import datetime, timedelta

import pytest

from src.platform.exception.exceptions import ConflictError, NotFoundError, ValidationFailedError
from src.service.cinema.app.command.add_movie_use_case import AddMovieUseCase
from src.service.cinema.app.command.add_showtime_use_case import AddShowtimeUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.app.query.view_seats_use_case import ViewSeatsUseCase
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


@pytest.mark.unit
class TestAddMovieAndShowtime:
    def test_add_movie_then_list(self, store: InMemoryStore) -> None:
        AddMovieUseCase(store=store).execute(
            title='Up', genre='Animation', rating='PG', runtime_minutes=96
        )
        movies = ListMoviesUseCase(store=store).execute()
        assert [m.title for m in movies] == ['Up']

    def test_negative_runtime_rejected(self, store: InMemoryStore) -> None:
        with pytest.raises(ValidationFailedError, match='Runtime cannot be negative'):
            AddMovieUseCase(store=store).execute(title='Up', genre='', rating='', runtime_minutes=-1)

    def test_add_showtime_returns_wire_id(
        self, seeded_store: InMemoryStore, future_time: datetime
    ) -> None:
        showtime_id, showtime = AddShowtimeUseCase(store=seeded_store).execute(
            movie_title='Dune',
            date_time=future_time + timedelta(hours=3),
            rows=2,
            cols=5,
            base_price=8.0,
            auditorium_name='',
        )
        assert showtime_id == 'ST_1'
        assert showtime.total_seats == 10
        assert showtime.auditorium_name is None

    def test_add_showtime_errors(self, seeded_store: InMemoryStore, future_time: datetime) -> None:
        use_case = AddShowtimeUseCase(store=seeded_store)

        with pytest.raises(NotFoundError, match='Movie not found'):
            use_case.execute(
                movie_title='Nope', date_time=future_time, rows=1, cols=1, base_price=1.0
            )
        with pytest.raises(ConflictError):
            use_case.execute(
                movie_title='Dune', date_time=future_time, rows=1, cols=1, base_price=1.0
            )
        with pytest.raises(ValidationFailedError):
            use_case.execute(
                movie_title='Dune',
                date_time=future_time + timedelta(days=1),
                rows=0,
                cols=1,
                base_price=1.0,
            )
        with pytest.raises(ValidationFailedError):
            use_case.execute(
                movie_title='Dune',
                date_time=future_time + timedelta(days=1),
                rows=1,
                cols=1,
                base_price=-2.0,
            )
        assert len(seeded_store.get_showtimes()) == 1


@pytest.mark.unit
class TestCatalogQueries:
    def test_list_showtimes_reports_live_availability_and_price(
        self, seeded_store: InMemoryStore, alice: User, showtime: Showtime
    ) -> None:
        Reservation.create(user=alice, showtime=showtime, positions=[(0, c) for c in range(4)])

        (listing,) = ListShowtimesUseCase(store=seeded_store).execute(movie_title='Dune')

        assert listing.showtime_id == 'ST_0'
        assert listing.available_seats == 8
        assert listing.total_seats == 12
        assert listing.dynamic_price == pytest.approx(13.333, abs=1e-3)
        assert listing.auditorium_name == 'Hall 1'

    def test_list_showtimes_unknown_movie(self, seeded_store: InMemoryStore) -> None:
        with pytest.raises(NotFoundError, match='Movie not found'):
            ListShowtimesUseCase(store=seeded_store).execute(movie_title='Nope')

    def test_view_seats(self, seeded_store: InMemoryStore, alice: User, showtime: Showtime) -> None:
        Reservation.create(user=alice, showtime=showtime, positions=[(1, 2)])

        seat_map = ViewSeatsUseCase(store=seeded_store).execute(showtime_id='ST_0')

        assert (seat_map.rows, seat_map.cols) == (3, 4)
        assert seat_map.availability[1] == [True, True, False, True]

    def test_view_seats_unknown_showtime(self, seeded_store: InMemoryStore) -> None:
        with pytest.raises(NotFoundError, match='Showtime not found'):
            ViewSeatsUseCase(store=seeded_store).execute(showtime_id='ST_3')


@pytest.mark.unit
class TestListBookings:
    def test_user_sees_only_own_bookings_admin_sees_all(
        self, seeded_store: InMemoryStore, alice: User, bob: User, showtime: Showtime
    ) -> None:
        mine = Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (0, 1)])
        theirs = Reservation.create(user=bob, showtime=showtime, positions=[(2, 3)])
        seeded_store.add_reservation(mine)
        seeded_store.add_reservation(theirs)
        use_case = ListBookingsUseCase(store=seeded_store)

        (view,) = use_case.list_user_bookings(user=alice)
        assert view.booking_id == mine.booking_id
        assert view.movie_title == 'Dune'
        assert view.seat_positions == [(0, 0), (0, 1)]
        assert view.total_price == pytest.approx(20.0)

        all_views = use_case.list_all_bookings()
        assert [v.username for v in all_views] == ['alice', 'bob']
