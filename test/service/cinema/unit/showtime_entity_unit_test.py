from datetime import datetime, timedelta

import pytest

from src.platform.exception.exceptions import ValidationFailedError
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.domain.entity.showtime_entity import Showtime


def _book_first(showtime: Showtime, count: int) -> None:
    booked = 0
    for row in range(showtime.rows):
        for col in range(showtime.cols):
            if booked == count:
                return
            showtime.book_seat(row, col)
            booked += 1


@pytest.mark.unit
class TestDynamicPricing:
    def test_price_follows_occupancy(self, showtime: Showtime) -> None:
        # 3x4 grid, base 10.0
        assert showtime.dynamic_price() == pytest.approx(10.0)

        _book_first(showtime, 6)
        assert showtime.dynamic_price() == pytest.approx(15.0)

        _book_first(showtime, 10)
        assert showtime.dynamic_price() == pytest.approx(18.33, abs=0.01)

    def test_price_is_strictly_increasing_in_booked_count(self, showtime: Showtime) -> None:
        prices = [showtime.dynamic_price()]
        for row in range(showtime.rows):
            for col in range(showtime.cols):
                showtime.book_seat(row, col)
                prices.append(showtime.dynamic_price())

        assert prices == sorted(prices)
        assert len(set(prices)) == len(prices)
        assert prices[-1] == pytest.approx(20.0)

    def test_price_drops_back_after_cancel(self, showtime: Showtime) -> None:
        showtime.book_seat(0, 0)
        showtime.cancel_seat(0, 0)
        assert showtime.dynamic_price() == pytest.approx(10.0)

    def test_set_base_price_rejects_negative(self, showtime: Showtime) -> None:
        with pytest.raises(ValidationFailedError):
            showtime.set_base_price(-1.0)
        showtime.set_base_price(12.0)
        assert showtime.dynamic_price() == pytest.approx(12.0)


@pytest.mark.unit
class TestShowtimeConstruction:
    def test_negative_base_price_rejected(self, movie: Movie) -> None:
        with pytest.raises(ValidationFailedError):
            Showtime(movie=movie, date_time=datetime.now(), rows=1, cols=1, base_price=-0.5)

    @pytest.mark.parametrize('rows,cols', [(0, 4), (3, 0)])
    def test_non_positive_grid_rejected(self, movie: Movie, rows: int, cols: int) -> None:
        with pytest.raises(ValidationFailedError):
            Showtime(movie=movie, date_time=datetime.now(), rows=rows, cols=cols, base_price=1.0)

    def test_grid_shares_showtime_lock(self, showtime: Showtime) -> None:
        assert showtime.total_seats == 12
        assert showtime.available_seat_count() == 12
        with showtime.lock:
            # Reentrant: grid operations under an already-held showtime lock
            assert showtime.book_seat(0, 0)
        assert showtime.booked_seat_count() == 1


@pytest.mark.unit
class TestSchedule:
    def test_has_started_at_or_after_start_time(self, showtime: Showtime) -> None:
        start = showtime.date_time
        assert not showtime.has_started(start - timedelta(minutes=1))
        assert showtime.has_started(start)
        assert showtime.has_started(start + timedelta(seconds=1))

    def test_overlap_uses_movie_runtime(self, showtime: Showtime) -> None:
        # Dune runs 155 minutes
        start = showtime.date_time
        assert showtime.overlaps(start=start + timedelta(minutes=154), runtime_minutes=90)
        assert not showtime.overlaps(start=start + timedelta(minutes=155), runtime_minutes=90)
        assert not showtime.overlaps(start=start - timedelta(minutes=90), runtime_minutes=90)
        assert showtime.end_time == start + timedelta(minutes=155)
