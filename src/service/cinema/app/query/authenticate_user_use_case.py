from pydantic import SecretStr

from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class AuthenticateUserUseCase:
    def __init__(self, *, store: InMemoryStore, password_hasher: IPasswordHasher) -> None:
        self.store = store
        self.password_hasher = password_hasher

    @Logger.io
    def execute(self, *, username: str, password: SecretStr) -> User:
        # Unknown user and wrong password are indistinguishable to the client
        user = self.store.find_user(username)
        if user is None:
            raise AuthenticationError()
        if not user.verify_password(plain_password=password, password_hasher=self.password_hasher):
            raise AuthenticationError()
        return user
