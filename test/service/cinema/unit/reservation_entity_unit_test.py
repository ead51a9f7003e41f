"""
Unit tests for Reservation

All-or-nothing booking: every rejection path must leave the grid exactly as
it was, and cancel_all_seats must free only the reservation's own cells.
"""

from datetime import timedelta

import pytest

from src.platform.exception.exceptions import (
    ConflictError,
    ExpiredWindowError,
    SeatOutOfRangeError,
    ValidationFailedError,
)
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.domain.value_object.payment_details import PaymentDetails


@pytest.mark.unit
class TestReservationCreate:
    def test_books_every_requested_seat_and_nothing_else(
        self, alice: User, showtime: Showtime
    ) -> None:
        reservation = Reservation.create(
            user=alice, showtime=showtime, positions=[(0, 0), (0, 1), (2, 3)]
        )

        assert reservation.seat_positions == [(0, 0), (0, 1), (2, 3)]
        assert sorted(showtime.grid.booked_positions()) == [(0, 0), (0, 1), (2, 3)]
        assert all(seat.booked for seat in reservation.booked_seats)

    def test_all_seats_charged_the_pre_booking_price(
        self, alice: User, bob: User, showtime: Showtime
    ) -> None:
        Reservation.create(user=bob, showtime=showtime, positions=[(1, c) for c in range(4)])
        # 4 of 12 booked -> 10 * (1 + 4/12)
        reservation = Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (0, 1)])

        assert [s.price for s in reservation.booked_seats] == pytest.approx([13.3333, 13.3333], 1e-3)
        assert reservation.get_total_price() == pytest.approx(26.667, abs=1e-3)

    def test_total_price_is_captured_not_live(self, alice: User, bob: User, showtime: Showtime) -> None:
        reservation = Reservation.create(user=alice, showtime=showtime, positions=[(0, 0)])
        Reservation.create(user=bob, showtime=showtime, positions=[(2, 0), (2, 1), (2, 2)])

        assert reservation.get_total_price() == pytest.approx(10.0)

    def test_booking_ids_are_unique(self, alice: User, showtime: Showtime) -> None:
        ids = {
            Reservation.create(user=alice, showtime=showtime, positions=[(r, c)]).booking_id
            for r in range(3)
            for c in range(4)
        }
        assert len(ids) == 12

    def test_payment_fields_are_kept_opaque(self, alice: User, showtime: Showtime) -> None:
        payment = PaymentDetails(card_number='4111111111111111', expiry='12/30', cvv='123')
        reservation = Reservation.create(
            user=alice, showtime=showtime, positions=[(0, 0)], payment=payment
        )
        assert reservation.payment.masked_card_number == '****1111'
        assert '4111' not in repr(reservation)


@pytest.mark.unit
class TestReservationRejections:
    def test_duplicate_seat_rejected_without_booking_anything(
        self, alice: User, showtime: Showtime
    ) -> None:
        with pytest.raises(ConflictError, match='Duplicate seat selection detected'):
            Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (0, 0)])
        assert showtime.booked_seat_count() == 0

    def test_unavailable_seat_rejects_whole_request(
        self, alice: User, bob: User, showtime: Showtime
    ) -> None:
        Reservation.create(user=bob, showtime=showtime, positions=[(1, 1)])

        with pytest.raises(ConflictError, match='Seat 2:2 is already booked'):
            Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (1, 1)])

        assert list(showtime.grid.booked_positions()) == [(1, 1)]

    def test_out_of_range_seat_rejects_whole_request(self, alice: User, showtime: Showtime) -> None:
        with pytest.raises(SeatOutOfRangeError, match='Seat 4:1 is out of range'):
            Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (3, 0)])
        assert showtime.booked_seat_count() == 0

    def test_started_showtime_rejected_before_seat_checks(
        self, alice: User, showtime: Showtime
    ) -> None:
        after_start = showtime.date_time + timedelta(minutes=1)
        with pytest.raises(ExpiredWindowError, match='Showtime has already started'):
            # Duplicate positions would also fail; the time gate wins
            Reservation.create(
                user=alice, showtime=showtime, positions=[(0, 0), (0, 0)], now=after_start
            )
        assert showtime.booked_seat_count() == 0

    def test_start_instant_counts_as_started(self, alice: User, showtime: Showtime) -> None:
        with pytest.raises(ExpiredWindowError):
            Reservation.create(
                user=alice, showtime=showtime, positions=[(0, 0)], now=showtime.date_time
            )

    def test_empty_request_rejected(self, alice: User, showtime: Showtime) -> None:
        with pytest.raises(ValidationFailedError):
            Reservation.create(user=alice, showtime=showtime, positions=[])


@pytest.mark.unit
class TestReservationCancel:
    def test_cancel_frees_exactly_its_own_seats(
        self, alice: User, bob: User, showtime: Showtime
    ) -> None:
        mine = Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (0, 1)])
        Reservation.create(user=bob, showtime=showtime, positions=[(2, 2)])

        mine.cancel_all_seats()

        assert mine.booked_seats == []
        assert mine.get_total_price() == 0
        assert list(showtime.grid.booked_positions()) == [(2, 2)]
        assert showtime.is_seat_available(0, 0)
        assert showtime.is_seat_available(0, 1)

    def test_cancelled_seats_can_be_rebooked(self, alice: User, bob: User, showtime: Showtime) -> None:
        Reservation.create(user=alice, showtime=showtime, positions=[(1, 1)]).cancel_all_seats()
        again = Reservation.create(user=bob, showtime=showtime, positions=[(1, 1)])
        assert again.seat_positions == [(1, 1)]


@pytest.mark.unit
class TestReservationRendering:
    def test_wire_seat_list_is_one_based(self, alice: User, showtime: Showtime) -> None:
        reservation = Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (2, 3)])
        assert reservation.wire_seat_list() == '1:1,3:4'

    def test_summary_lists_labels_and_total(self, alice: User, showtime: Showtime) -> None:
        reservation = Reservation.create(user=alice, showtime=showtime, positions=[(0, 0), (1, 2)])
        summary = reservation.summary()

        assert f'Booking ID: {reservation.booking_id}' in summary
        assert 'Movie: Dune' in summary
        assert 'Auditorium: Hall 1' in summary
        assert 'Seats: A1, B3' in summary
        assert 'Total Cost: $20.00' in summary
