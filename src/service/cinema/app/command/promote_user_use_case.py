from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class PromoteUserUseCase:
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    def execute(self, *, username: str) -> User:
        user = self.store.promote_user_to_admin(username)
        self.store.persist()

        Logger.base.info(f'[ADMIN] {username} promoted to admin')
        return user
