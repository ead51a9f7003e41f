from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import attrs


if TYPE_CHECKING:
    from src.service.cinema.domain.entity.movie_entity import Movie
    from src.service.cinema.domain.entity.reservation_entity import Reservation
    from src.service.cinema.domain.entity.showtime_entity import Showtime
    from src.service.cinema.domain.entity.user_entity import User


@attrs.define
class StoreState:
    """Full content of the store at one instant"""

    users: list['User'] = attrs.field(factory=list)
    movies: list['Movie'] = attrs.field(factory=list)
    showtimes: list['Showtime'] = attrs.field(factory=list)
    reservations: list['Reservation'] = attrs.field(factory=list)


class ISnapshotRepo(ABC):
    @abstractmethod
    def save(self, *, state: StoreState) -> None:
        """Write a full snapshot, replacing the previous one"""
        pass

    @abstractmethod
    def load(self) -> Optional[StoreState]:
        """Read the latest snapshot, or None when no snapshot exists"""
        pass
