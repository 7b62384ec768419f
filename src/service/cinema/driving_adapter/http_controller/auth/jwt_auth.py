"""
Stateless identity extraction from the auth cookie.

Tokens are issued by the external identity provider; this service only
verifies them and rebuilds the acting user from the payload.
"""

from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.cinema.domain.entity.user_entity import UserEntity


AUTH_COOKIE_NAME = 'fastapiusersauth'


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> UserEntity:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        name = payload.get('name')
        email = payload.get('email')
        if not user_id or not name or not email:
            raise AuthenticationError('Invalid token')

        # Rebuild UserEntity from JWT payload (no DB query)
        return UserEntity(id=user_id, name=name, email=email)
