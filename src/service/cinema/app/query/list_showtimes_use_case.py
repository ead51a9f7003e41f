from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.listing_dto import ShowtimeListing
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class ListShowtimesUseCase:
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    def execute(self, *, movie_title: str) -> list[ShowtimeListing]:
        if not self.store.movie_exists(movie_title):
            raise NotFoundError('Movie not found')

        listings = []
        for showtime_id, showtime in self.store.showtimes_for_movie(movie_title):
            # Count and price must come from the same grid state
            with showtime.lock:
                listings.append(
                    ShowtimeListing(
                        showtime_id=showtime_id,
                        date_time=showtime.date_time,
                        available_seats=showtime.available_seat_count(),
                        total_seats=showtime.total_seats,
                        dynamic_price=showtime.dynamic_price(),
                        auditorium_name=showtime.auditorium_name,
                    )
                )
        return listings
