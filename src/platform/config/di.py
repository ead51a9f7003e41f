"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from typing import Optional

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.metrics.booking_metrics import BookingMetrics
from src.service.cinema.app.command.add_movie_use_case import AddMovieUseCase
from src.service.cinema.app.command.add_showtime_use_case import AddShowtimeUseCase
from src.service.cinema.app.command.book_seats_use_case import BookSeatsUseCase
from src.service.cinema.app.command.bootstrap_store_use_case import BootstrapStoreUseCase
from src.service.cinema.app.command.cancel_reservation_use_case import CancelReservationUseCase
from src.service.cinema.app.command.promote_user_use_case import PromoteUserUseCase
from src.service.cinema.app.command.register_user_use_case import RegisterUserUseCase
from src.service.cinema.app.interface.i_snapshot_repo import ISnapshotRepo
from src.service.cinema.app.query.authenticate_user_use_case import AuthenticateUserUseCase
from src.service.cinema.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.app.query.view_seats_use_case import ViewSeatsUseCase
from src.service.cinema.driven_adapter.repo.snapshot_repo_impl import SnapshotRepoImpl
from src.service.cinema.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore
from src.service.cinema.driving_adapter.protocol.command_dispatcher import CommandDispatcher
from src.service.cinema.driving_adapter.socket_server.booking_server import BookingServer


def _build_snapshot_repo(settings: Settings) -> Optional[ISnapshotRepo]:
    if not settings.SNAPSHOT_ENABLED:
        return None
    return SnapshotRepoImpl(path=settings.SNAPSHOT_PATH)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Observability
    booking_metrics = providers.Singleton(BookingMetrics)

    # Driven adapters (shared state lives in the store singleton)
    password_hasher = providers.Singleton(
        BcryptPasswordHasher, rounds=config_service.provided.BCRYPT_ROUNDS
    )
    snapshot_repo = providers.Singleton(_build_snapshot_repo, settings=config_service)
    store = providers.Singleton(InMemoryStore, snapshot_repo=snapshot_repo)

    # Command use cases
    register_user_use_case = providers.Factory(
        RegisterUserUseCase, store=store, password_hasher=password_hasher
    )
    book_seats_use_case = providers.Factory(
        BookSeatsUseCase,
        store=store,
        metrics=booking_metrics,
        max_seats_per_booking=config_service.provided.MAX_SEATS_PER_BOOKING,
    )
    cancel_reservation_use_case = providers.Factory(
        CancelReservationUseCase, store=store, metrics=booking_metrics
    )
    add_movie_use_case = providers.Factory(AddMovieUseCase, store=store)
    add_showtime_use_case = providers.Factory(AddShowtimeUseCase, store=store)
    promote_user_use_case = providers.Factory(PromoteUserUseCase, store=store)
    bootstrap_store_use_case = providers.Factory(
        BootstrapStoreUseCase,
        store=store,
        password_hasher=password_hasher,
        admin_username=config_service.provided.DEFAULT_ADMIN_USERNAME,
        admin_password=config_service.provided.DEFAULT_ADMIN_PASSWORD,
        admin_email=config_service.provided.DEFAULT_ADMIN_EMAIL,
    )

    # Query use cases
    authenticate_user_use_case = providers.Factory(
        AuthenticateUserUseCase, store=store, password_hasher=password_hasher
    )
    list_movies_use_case = providers.Factory(ListMoviesUseCase, store=store)
    list_showtimes_use_case = providers.Factory(ListShowtimesUseCase, store=store)
    view_seats_use_case = providers.Factory(ViewSeatsUseCase, store=store)
    list_bookings_use_case = providers.Factory(ListBookingsUseCase, store=store)

    # Driving adapters
    command_dispatcher = providers.Factory(
        CommandDispatcher,
        authenticate_user=authenticate_user_use_case,
        register_user=register_user_use_case,
        list_movies=list_movies_use_case,
        list_showtimes=list_showtimes_use_case,
        view_seats=view_seats_use_case,
        book_seats=book_seats_use_case,
        cancel_reservation=cancel_reservation_use_case,
        list_bookings=list_bookings_use_case,
        add_movie=add_movie_use_case,
        add_showtime=add_showtime_use_case,
        promote_user=promote_user_use_case,
        max_seats_per_booking=config_service.provided.MAX_SEATS_PER_BOOKING,
    )
    booking_server = providers.Singleton(
        BookingServer,
        host=config_service.provided.SERVER_HOST,
        port=config_service.provided.SERVER_PORT,
        backlog=config_service.provided.SERVER_BACKLOG,
        dispatcher_factory=command_dispatcher.provider,
        metrics=booking_metrics,
    )


container = Container()


def cleanup() -> None:
    container.reset_singletons()
