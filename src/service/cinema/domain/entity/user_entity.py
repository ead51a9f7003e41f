import re
from typing import TYPE_CHECKING

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import ValidationFailedError
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher


if TYPE_CHECKING:
    from src.service.cinema.domain.entity.reservation_entity import Reservation


USERNAME_PATTERN = re.compile(r'[A-Za-z0-9]{3,20}')
EMAIL_PATTERN = re.compile(r'[^@\s|]+@[^@\s|]+\.[^@\s|]+')
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt limit


@attrs.define(eq=False)
class User:
    username: str
    password_hash: str = attrs.field(repr=False)  # Hide from repr for security
    email: str = ''
    is_admin: bool = False
    reservations: list['Reservation'] = attrs.field(factory=list, repr=False)

    @classmethod
    def register(
        cls,
        *,
        username: str,
        plain_password: SecretStr,
        email: str,
        password_hasher: IPasswordHasher,
        is_admin: bool = False,
    ) -> 'User':
        cls.validate_registration(username=username, plain_password=plain_password, email=email)
        return cls(
            username=username,
            password_hash=password_hasher.hash_password(plain_password=plain_password),
            email=email,
            is_admin=is_admin,
        )

    @staticmethod
    def validate_registration(*, username: str, plain_password: SecretStr, email: str) -> None:
        if not USERNAME_PATTERN.fullmatch(username):
            raise ValidationFailedError('Username must be 3-20 alphanumeric characters')
        password = plain_password.get_secret_value()
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailedError(
                f'Password must be at least {MIN_PASSWORD_LENGTH} characters'
            )
        if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValidationFailedError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes')
        if not EMAIL_PATTERN.fullmatch(email):
            raise ValidationFailedError('Invalid email address')

    def verify_password(
        self, *, plain_password: SecretStr, password_hasher: IPasswordHasher
    ) -> bool:
        return password_hasher.verify_password(
            plain_password=plain_password, hashed_password=self.password_hash
        )

    def promote(self) -> None:
        self.is_admin = True

    # Reservation list mutations happen under the store lock

    def add_reservation(self, reservation: 'Reservation') -> None:
        self.reservations.append(reservation)

    def remove_reservation(self, booking_id: str) -> None:
        self.reservations[:] = [r for r in self.reservations if r.booking_id != booking_id]

    def has_reservation(self, booking_id: str) -> bool:
        return any(r.booking_id == booking_id for r in self.reservations)
