"""
Bootstrap Store Use Case

Runs once at process start:
1. Restore the latest snapshot, if any
2. Make sure the default admin account exists
"""

from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driven_adapter.store.in_memory_store import InMemoryStore


class BootstrapStoreUseCase:
    def __init__(
        self,
        *,
        store: InMemoryStore,
        password_hasher: IPasswordHasher,
        admin_username: str,
        admin_password: SecretStr,
        admin_email: str,
    ) -> None:
        self.store = store
        self.password_hasher = password_hasher
        self.admin_username = admin_username
        self.admin_password = admin_password
        self.admin_email = admin_email

    @Logger.io
    def execute(self) -> bool:
        """Returns True when the default admin had to be created"""
        self.store.restore()

        created = self.store.ensure_user(
            self.admin_username,
            lambda: User.register(
                username=self.admin_username,
                plain_password=self.admin_password,
                email=self.admin_email,
                password_hasher=self.password_hasher,
                is_admin=True,
            ),
        )
        if created:
            self.store.persist()
            Logger.base.info(f'[BOOTSTRAP] Default admin {self.admin_username} created')
        return created
