"""
Caller identity from a bearer JWT

Accounts are owned by the identity service; this service only verifies the
token signature and reads `user_id` and `role` from the payload.
"""

from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Any, Dict, Optional

import attrs
import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError


class UserRole(StrEnum):
    DINER = 'diner'
    OWNER = 'owner'
    ADMIN = 'admin'


@attrs.frozen
class CurrentUser:
    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = 7

    def create_jwt_token(self, *, user_id: str, role: UserRole) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': user_id,
            'exp': now + timedelta(days=self.token_expire_days),
            'iat': now,
            'user_id': user_id,
            'role': role.value,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError('Invalid token') from e

    def get_current_user_from_jwt(self, token: Optional[str]) -> CurrentUser:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)
        user_id = payload.get('user_id')
        role = payload.get('role')
        if not user_id or not role:
            raise AuthenticationError('Invalid token')

        try:
            return CurrentUser(user_id=str(user_id), role=UserRole(role))
        except ValueError as e:
            raise AuthenticationError('Invalid token') from e
