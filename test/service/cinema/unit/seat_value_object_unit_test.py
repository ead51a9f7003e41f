import pytest

from src.service.cinema.domain.value_object.seat import Seat


@pytest.mark.unit
class TestSeat:
    @pytest.mark.parametrize(
        'row,col,label',
        [(0, 0, 'A1'), (2, 11, 'C12'), (25, 0, 'Z1'), (26, 0, 'AA1'), (27, 4, 'AB5')],
    )
    def test_label(self, row: int, col: int, label: str) -> None:
        assert Seat(row=row, col=col).label == label

    def test_wire_position_is_one_based(self) -> None:
        assert Seat(row=0, col=3).wire_position == '1:4'

    def test_set_price(self) -> None:
        seat = Seat(row=0, col=0, price=10.0)
        seat.set_price(12.5)
        assert seat.price == 12.5

        with pytest.raises(ValueError, match='negative'):
            seat.set_price(-1.0)
        assert seat.price == 12.5

    def test_standalone_booked_flag(self) -> None:
        seat = Seat(row=1, col=1)
        assert seat.book() is True
        assert seat.book() is False
        assert seat.cancel() is True
        assert seat.cancel() is False
