from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.listing_dto import SeatMap
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class ViewSeatsUseCase:
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    def execute(self, *, showtime_id: str) -> SeatMap:
        showtime = self.store.find_showtime_by_id(showtime_id)
        if showtime is None:
            raise NotFoundError('Showtime not found')
        return SeatMap(rows=showtime.rows, cols=showtime.cols, availability=showtime.seat_map())
