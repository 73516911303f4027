from typing import Optional

from fastapi import Depends, Header, Request

from ..contracts import AuthContext
from ..errors import AuthRequiredError
from .service import AuthService


def get_services(request: Request):
    """The per-app ServiceContainer built by the gateway's create_app()."""
    return request.app.state.services


def get_auth_service(services=Depends(get_services)) -> AuthService:
    return services.auth


def get_authorization_header(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> Optional[str]:
    """Raw `Authorization` value, e.g. 'Bearer <jwt>'; None when absent."""
    return authorization


def require_user(
    auth: AuthService = Depends(get_auth_service),
    authorization: Optional[str] = Depends(get_authorization_header),
) -> AuthContext:
    """Bearer access token -> AuthContext, or 401 through the error handlers."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise AuthRequiredError()
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthRequiredError()
    return auth.authenticate(token)
