from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.restaurant_booking.driving_adapter.http_controller.auth.jwt_auth import (
    CurrentUser,
    JwtAuth,
    UserRole,
)


bearer_scheme = HTTPBearer(auto_error=False)


class RoleAuthStrategy:
    @staticmethod
    def can_book(user: CurrentUser) -> bool:
        return user.role in (UserRole.DINER, UserRole.ADMIN)

    @staticmethod
    def can_manage_restaurant(user: CurrentUser) -> bool:
        return user.role in (UserRole.OWNER, UserRole.ADMIN)


@inject
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> CurrentUser:
    """Stateless: the token alone identifies the caller"""
    return jwt_auth.get_current_user_from_jwt(credentials.credentials if credentials else None)


async def require_diner(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not RoleAuthStrategy.can_book(current_user):
        raise ForbiddenError('Only diners can perform this action')
    return current_user


async def require_owner(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not RoleAuthStrategy.can_manage_restaurant(current_user):
        raise ForbiddenError('Only restaurant owners can perform this action')
    return current_user
