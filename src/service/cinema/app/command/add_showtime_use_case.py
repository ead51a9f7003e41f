from datetime import datetime
from typing import Optional

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class AddShowtimeUseCase:
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    def execute(
        self,
        *,
        movie_title: str,
        date_time: datetime,
        rows: int,
        cols: int,
        base_price: float,
        auditorium_name: Optional[str] = None,
    ) -> tuple[str, Showtime]:
        """
        Schedule a screening and return its `ST_<index>` id with the showtime.

        Raises:
            NotFoundError: movie is not in the catalog
            ValidationFailedError: non-positive grid size or negative price
            ConflictError: same movie at the same time, or auditorium already busy
        """
        movie = self.store.find_movie(movie_title)
        if movie is None:
            raise NotFoundError('Movie not found')

        showtime = Showtime(
            movie=movie,
            date_time=date_time,
            rows=rows,
            cols=cols,
            base_price=base_price,
            auditorium_name=auditorium_name or None,
        )
        showtime_id = self.store.add_showtime(showtime)
        self.store.persist()

        Logger.base.info(
            f'[ADMIN] Showtime {showtime_id} added: {movie.title} at {date_time} '
            f'({rows}x{cols}, base={base_price:.2f})'
        )
        return showtime_id, showtime
