from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class AddMovieUseCase:
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    def execute(self, *, title: str, genre: str, rating: str, runtime_minutes: int) -> Movie:
        movie = Movie.create(
            title=title, genre=genre, rating=rating, runtime_minutes=runtime_minutes
        )
        self.store.add_movie(movie)
        self.store.persist()

        Logger.base.info(f'[ADMIN] Movie added: {movie.title} ({movie.runtime_minutes} min)')
        return movie
