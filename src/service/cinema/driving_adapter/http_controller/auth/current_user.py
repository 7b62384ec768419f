from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends

from src.platform.config.di import Container
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import (
    AUTH_COOKIE_NAME,
    JwtAuth,
)


@inject
async def get_current_user(
    token: Optional[str] = Cookie(None, alias=AUTH_COOKIE_NAME),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """Get current user from JWT token (stateless, no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(token)
