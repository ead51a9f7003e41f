from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class ListMoviesUseCase:
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    def execute(self) -> list[Movie]:
        return self.store.get_movies()
