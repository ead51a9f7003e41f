from typing import Optional

from src.platform.exception.exceptions import AdminRequiredError, AuthRequiredError
from src.service.cinema.domain.entity.user_entity import User
from src.service.cinema.driving_adapter.protocol.protocol_constant import (
    COMMAND_ACCESS,
    Access,
    Command,
)


class RoleAuthService:
    @staticmethod
    def is_authenticated(user: Optional[User]) -> bool:
        return user is not None

    @staticmethod
    def is_admin(user: Optional[User]) -> bool:
        return user is not None and user.is_admin


def require_authenticated(current_user: Optional[User]) -> User:
    if not RoleAuthService.is_authenticated(current_user):
        raise AuthRequiredError()
    return current_user


def require_admin(current_user: Optional[User]) -> User:
    user = require_authenticated(current_user)
    if not RoleAuthService.is_admin(user):
        raise AdminRequiredError()
    return user


def authorize(command: Command, current_user: Optional[User]) -> Optional[User]:
    """Gate a command on its access level; returns the acting user (None for public calls)"""
    access = COMMAND_ACCESS[command]
    if access is Access.ADMIN:
        return require_admin(current_user)
    if access is Access.AUTHENTICATED:
        return require_authenticated(current_user)
    return current_user
