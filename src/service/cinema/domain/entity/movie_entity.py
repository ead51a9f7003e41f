from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationFailedError


_frozen = attrs.setters.frozen


@attrs.define
class Movie:
    """Catalog entry; `title` is the natural key used across the store."""

    title: str = attrs.field(on_setattr=_frozen)
    genre: str = attrs.field(default='', on_setattr=_frozen)
    rating: str = attrs.field(default='', on_setattr=_frozen)
    runtime_minutes: int = attrs.field(default=0, on_setattr=_frozen)
    poster_path: Optional[str] = None

    @classmethod
    def create(
        cls,
        *,
        title: str,
        genre: str,
        rating: str,
        runtime_minutes: int,
        poster_path: Optional[str] = None,
    ) -> 'Movie':
        if not title or not title.strip():
            raise ValidationFailedError('Movie title is required')
        if runtime_minutes < 0:
            raise ValidationFailedError('Runtime cannot be negative')
        return cls(
            title=title.strip(),
            genre=genre.strip(),
            rating=rating.strip(),
            runtime_minutes=runtime_minutes,
            poster_path=poster_path,
        )
