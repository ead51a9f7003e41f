from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.constant.path import DATA_DIR


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Cinema Booking Server'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # TCP listener
    SERVER_HOST: str = '127.0.0.1'
    SERVER_PORT: int = 4242
    SERVER_BACKLOG: int = 50

    # Snapshot persistence
    SNAPSHOT_PATH: Path = DATA_DIR / 'cinema_snapshot.json'
    SNAPSHOT_ENABLED: bool = True

    # Bootstrap administrator, created after restore when missing
    DEFAULT_ADMIN_USERNAME: str = 'admin'
    DEFAULT_ADMIN_PASSWORD: SecretStr = SecretStr('admin123')
    DEFAULT_ADMIN_EMAIL: str = 'admin@cinema.local'

    # Security
    BCRYPT_ROUNDS: int = 12

    # Booking limits
    MAX_SEATS_PER_BOOKING: int = 50

    # Prometheus
    METRICS_ENABLED: bool = False
    METRICS_PORT: int = 9464

    @field_validator('BCRYPT_ROUNDS')
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        # bcrypt.gensalt only accepts 4..31
        if not 4 <= v <= 31:
            raise ValueError('BCRYPT_ROUNDS must be between 4 and 31')
        return v

    @field_validator('MAX_SEATS_PER_BOOKING')
    @classmethod
    def validate_max_seats(cls, v: int) -> int:
        if v < 1:
            raise ValueError('MAX_SEATS_PER_BOOKING must be positive')
        return v


settings = Settings()  # type: ignore
