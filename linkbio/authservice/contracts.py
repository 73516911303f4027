from __future__ import annotations
from datetime import datetime
from typing import Annotated, Any, Dict, Optional, Protocol

from pydantic import AfterValidator, BaseModel, EmailStr, constr

from ..contracts import WireModel

BCRYPT_MAX_BYTES = 72

def _fits_bcrypt(value: str) -> str:
    # bcrypt counts bytes, not characters
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return value

NewPassword = Annotated[constr(min_length=6, max_length=BCRYPT_MAX_BYTES), AfterValidator(_fits_bcrypt)]

# ---------- Domain Models ----------

class UserRecord(BaseModel):
    """A stored user. Never leaves the service layer as-is."""
    id: str
    username: str
    email: str
    password_hash: str
    is_verified: bool = False
    mfa_enabled: bool = False
    mfa_secret: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class UserSummary(WireModel):
    id: str
    username: str
    email: str
    is_verified: bool
    mfa_enabled: bool

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            is_verified=user.is_verified,
            mfa_enabled=user.mfa_enabled,
        )

class TokenClaims(BaseModel):
    sub: str
    typ: str
    iat: int
    exp: int
    jti: str

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str

class AuthSession(BaseModel):
    tokens: TokenPair
    user: UserSummary

    def to_wire(self) -> Dict[str, Any]:
        return {
            "success": True,
            "token": self.tokens.access_token,
            "refreshToken": self.tokens.refresh_token,
            "user": self.user.to_wire(),
        }

class MfaChallenge(BaseModel):
    """Login branch: password accepted, second factor still owed. Carries no tokens."""
    message: str = "MFA token required"

    def to_wire(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message, "mfaRequired": True}

class MfaEnrollment(BaseModel):
    secret: str
    provisioning_uri: str

class MfaSetup(WireModel):
    secret: str
    qr_code_url: str
    qr_code: str

# ---------- Ports (Contracts) ----------

class UserRepoPort(Protocol):
    """
    Contract for the credential store. `create` and `update` raise
    DuplicateKeyError when username or email is already taken.
    """
    def find_by_id(self, user_id: str) -> Optional[UserRecord]: ...
    def find_by_email(self, email: str) -> Optional[UserRecord]: ...
    def find_by_username(self, username: str) -> Optional[UserRecord]: ...
    def find_by_email_or_username(self, *, email: str, username: str) -> Optional[UserRecord]: ...
    def create(self, *, username: str, email: str, password_hash: str) -> UserRecord: ...
    def update(self, user_id: str, **changes: Any) -> Optional[UserRecord]: ...

class ClockPort(Protocol):
    def now_utc_ts(self) -> int: ...

# ---------- Service I/O ----------

class RegisterRequest(WireModel):
    username: constr(strip_whitespace=True, min_length=3, max_length=30)
    email: EmailStr
    password: NewPassword

class LoginRequest(WireModel):
    email: EmailStr
    password: constr(min_length=1, max_length=72)
    token: Optional[str] = None  # TOTP code, only when MFA is on

class RefreshRequest(WireModel):
    refresh_token: Optional[str] = None

class MfaCodeRequest(WireModel):
    token: Optional[str] = None
