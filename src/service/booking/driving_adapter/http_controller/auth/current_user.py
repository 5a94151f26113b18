from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.di import Container
from src.service.booking.domain.entity.user_entity import UserEntity
from src.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UserEntity:
    """Resolve the caller from `Authorization: Bearer <jwt>`, 401 when missing or invalid"""
    token = credentials.credentials if credentials else None
    return jwt_auth.get_current_user_info_from_jwt(token)
