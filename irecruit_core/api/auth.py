from __future__ import annotations
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from irecruit_core.services.container import Container

_bearer = HTTPBearer(auto_error=False)


def get_app_container(request: Request) -> Container:
    return request.app.state.container


def optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    container: Container = Depends(get_app_container),
) -> Optional[str]:
    """Id utilisateur si un jeton valide est fourni, sinon None (pas d'erreur)."""
    if credentials is None:
        return None
    return container.auth.verify(credentials.credentials)


def require_user(user_id: Optional[str] = Depends(optional_user)) -> str:
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
