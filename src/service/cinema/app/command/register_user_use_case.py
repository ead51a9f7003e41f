from pydantic import SecretStr

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class RegisterUserUseCase:
    def __init__(self, *, store: InMemoryStore, password_hasher: IPasswordHasher) -> None:
        self.store = store
        self.password_hasher = password_hasher

    @Logger.io
    def execute(self, *, username: str, password: SecretStr, email: str) -> User:
        # Duplicate check before paying for the bcrypt hash; add_user re-checks under the lock
        User.validate_registration(username=username, plain_password=password, email=email)
        if self.store.username_exists(username):
            raise ConflictError('Username already exists')

        user = User.register(
            username=username,
            plain_password=password,
            email=email,
            password_hasher=self.password_hasher,
        )
        self.store.add_user(user)
        self.store.persist()

        Logger.base.info(f'[REGISTER] New user {username}')
        return user
