from .contracts import ChangePasswordRequest, UpdateProfileRequest, UserProfile
from .service import UserService
from .routes import router as users_router

__all__ = [
    "ChangePasswordRequest",
    "UpdateProfileRequest",
    "UserProfile",
    "UserService",
    "users_router",
]
