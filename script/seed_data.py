#!/usr/bin/env python3
"""
Snapshot Seed Script
Populate a demo catalog into the snapshot file

Features:
1. Bootstrap - Restore the existing snapshot and ensure the default admin
2. Create Users - Create demo customer accounts
3. Create Catalog - Add demo movies and schedule showtimes starting tomorrow

Notes:
- Entries that already exist are skipped, so the script can be re-run
- Requires SNAPSHOT_ENABLED=true; otherwise nothing outlives the process
"""

from dataclasses import dataclass
from datetime import datetime, time, timedelta

from pydantic import SecretStr

from src.platform.config.di import container
from src.platform.exception.exceptions import ConflictError

DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class MovieConfig:
    """Movie seed configuration"""
    title: str
    genre: str
    rating: str
    runtime_minutes: int


@dataclass
class ShowtimeConfig:
    """Showtime seed configuration (day offset from tomorrow)"""
    movie_title: str
    day_offset: int
    start: time
    auditorium: str
    rows: int = 8
    cols: int = 12
    base_price: float = 10.0


TEST_USERS = ['alice', 'bob', 'loadtest1']

MOVIES = [
    MovieConfig(title='Dune Part Two', genre='Sci-Fi', rating='PG-13', runtime_minutes=166),
    MovieConfig(title='Inside Out 2', genre='Animation', rating='PG', runtime_minutes=96),
    MovieConfig(title='Oppenheimer', genre='Drama', rating='R', runtime_minutes=180),
]

SHOWTIMES = [
    ShowtimeConfig('Dune Part Two', 0, time(18, 0), 'Hall 1', base_price=12.5),
    ShowtimeConfig('Dune Part Two', 0, time(21, 30), 'Hall 1', base_price=12.5),
    ShowtimeConfig('Inside Out 2', 0, time(14, 0), 'Hall 2', rows=6, cols=10, base_price=9.0),
    ShowtimeConfig('Inside Out 2', 1, time(11, 0), 'Hall 2', rows=6, cols=10, base_price=8.0),
    ShowtimeConfig('Oppenheimer', 1, time(19, 0), 'Hall 3', rows=10, cols=14),
]


def create_users() -> None:
    print(f'👥 Creating {len(TEST_USERS)} users...')
    register = container.register_user_use_case()
    for username in TEST_USERS:
        try:
            register.execute(
                username=username,
                password=SecretStr(DEFAULT_PASSWORD),
                email=f'{username}@cinema.local',
            )
            print(f'   ✅ Created user: {username}')
        except ConflictError:
            print(f'   ⏭️  User exists: {username}')
    print(f'   📧 Credentials: {DEFAULT_PASSWORD}')


def create_movies() -> None:
    print(f'🎬 Creating {len(MOVIES)} movies...')
    add_movie = container.add_movie_use_case()
    for config in MOVIES:
        try:
            add_movie.execute(
                title=config.title,
                genre=config.genre,
                rating=config.rating,
                runtime_minutes=config.runtime_minutes,
            )
            print(f'   ✅ Created movie: {config.title}')
        except ConflictError:
            print(f'   ⏭️  Movie exists: {config.title}')


def create_showtimes() -> None:
    print(f'🎫 Scheduling {len(SHOWTIMES)} showtimes...')
    add_showtime = container.add_showtime_use_case()
    tomorrow = datetime.now().date() + timedelta(days=1)
    for config in SHOWTIMES:
        start = datetime.combine(tomorrow + timedelta(days=config.day_offset), config.start)
        try:
            showtime_id, _ = add_showtime.execute(
                movie_title=config.movie_title,
                date_time=start,
                rows=config.rows,
                cols=config.cols,
                base_price=config.base_price,
                auditorium_name=config.auditorium,
            )
            print(f'   ✅ {showtime_id}: {config.movie_title} @ {start:%Y-%m-%d %H:%M}')
        except ConflictError:
            print(f'   ⏭️  Slot taken: {config.movie_title} @ {start:%Y-%m-%d %H:%M}')


def verify_data() -> None:
    print('🔍 Verifying seeded data...')
    store = container.store()
    print(f'   Users: {len(store.get_users())}')
    print(f'   Movies: {len(store.get_movies())}')
    print(f'   Showtimes: {len(store.get_showtimes())}')
    print(f'   Reservations: {len(store.get_reservations())}')


def main() -> None:
    settings = container.config_service()
    print('🌱 Starting data seeding...')
    print('=' * 50)

    if not settings.SNAPSHOT_ENABLED:
        print('⚠️  SNAPSHOT_ENABLED is false, seeded data will not be saved')

    try:
        container.bootstrap_store_use_case().execute()
        create_users()
        print()
        create_movies()
        print()
        create_showtimes()
        print()
        verify_data()

        print()
        print('=' * 50)
        print(f'🌱 Data seeding completed! Snapshot: {settings.SNAPSHOT_PATH}')
        print('📋 Test accounts:')
        print(f'   Admin: {settings.DEFAULT_ADMIN_USERNAME} / (DEFAULT_ADMIN_PASSWORD)')
        for username in TEST_USERS:
            print(f'   Customer: {username} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)


if __name__ == '__main__':
    main()
