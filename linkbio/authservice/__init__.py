from .service import AuthService, SystemClock
from .crypto import TokenIssuer
from .totp import TotpEngine
from .models import PasswordHasher, InMemoryUserRepo
from .config import AuthConfig
from .deps import get_auth_service, require_user
from .routes import router as auth_router

__all__ = [
    "AuthService",
    "SystemClock",
    "TokenIssuer",
    "TotpEngine",
    "PasswordHasher",
    "InMemoryUserRepo",
    "AuthConfig",
    "get_auth_service",
    "require_user",
    "auth_router",
]
