from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, constr

from ..authservice.contracts import NewPassword, UserRecord
from ..contracts import WireModel


class UserProfile(WireModel):
    """The owner's view of their account; the password hash and MFA secret stay server-side."""
    id: str
    username: str
    email: str
    is_verified: bool
    mfa_enabled: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserProfile":
        return cls(**user.model_dump(exclude={"password_hash", "mfa_secret"}))


class UpdateProfileRequest(WireModel):
    username: Optional[constr(strip_whitespace=True, min_length=3, max_length=30)] = None
    email: Optional[EmailStr] = None


class ChangePasswordRequest(WireModel):
    current_password: Optional[str] = None
    new_password: Optional[NewPassword] = None
