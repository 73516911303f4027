from __future__ import annotations
import logging
import time
from typing import Optional, Union

from ..contracts import AuthContext
from ..errors import (
    ConflictError, DuplicateKeyError, InvalidCredentialsError,
    InvalidMfaCodeError, InvalidTokenError, NotFoundError,
)
from .config import AuthConfig
from .contracts import (
    AuthSession, ClockPort, LoginRequest, MfaChallenge, MfaSetup,
    RegisterRequest, UserRecord, UserRepoPort, UserSummary,
)
from .crypto import TokenIssuer
from .models import PasswordHasher
from .totp import TotpEngine


class SystemClock(ClockPort):
    def now_utc_ts(self) -> int:
        return int(time.time())


class AuthService:
    """
    Registration, login with an optional TOTP step, token refresh and the MFA
    lifecycle (enroll, confirm, disable).

    login: credentials checked -> MfaChallenge when MFA is on and no code was
    sent, otherwise -> AuthSession. No tokens are minted before the second
    factor passes.
    """
    def __init__(
        self,
        *,
        user_repo: UserRepoPort,
        cfg: Optional[AuthConfig] = None,
        clock: Optional[ClockPort] = None,
        hasher: Optional[PasswordHasher] = None,
        tokens: Optional[TokenIssuer] = None,
        totp: Optional[TotpEngine] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.user_repo = user_repo
        self.cfg = cfg or AuthConfig()
        self.clock = clock or SystemClock()
        self.hasher = hasher or PasswordHasher(rounds=self.cfg.BCRYPT_ROUNDS)
        self.tokens = tokens or TokenIssuer(
            access_secret=self.cfg.JWT_SECRET,
            refresh_secret=self.cfg.JWT_REFRESH_SECRET,
            clock=self.clock,
            access_ttl_seconds=self.cfg.ACCESS_TTL_SECONDS,
            refresh_ttl_seconds=self.cfg.REFRESH_TTL_SECONDS,
            algorithm=self.cfg.JWT_ALGORITHM,
        )
        self.totp = totp or TotpEngine(
            issuer=self.cfg.MFA_ISSUER,
            clock=self.clock,
            valid_window=self.cfg.MFA_VALID_WINDOW,
        )
        self.log = logger or logging.getLogger("linkbio.authservice")

    # --------- Core operations ----------
    def register(self, req: RegisterRequest) -> AuthSession:
        if self.user_repo.find_by_email_or_username(email=req.email, username=req.username):
            raise ConflictError("User already exists")
        try:
            user = self.user_repo.create(
                username=req.username,
                email=req.email,
                password_hash=self.hasher.hash(req.password),
            )
        except DuplicateKeyError:
            # lost a race with a concurrent registration
            raise ConflictError("User already exists")
        self.log.info("auth.register", extra={"user_id": user.id})
        return self._session_for(user)

    def login(self, req: LoginRequest) -> Union[AuthSession, MfaChallenge]:
        user = self.user_repo.find_by_email(req.email)
        if not user or not self.hasher.verify(req.password, user.password_hash):
            self.log.info("auth.login_failed")
            raise InvalidCredentialsError()

        if user.mfa_enabled:
            if not req.token:
                return MfaChallenge()
            if not self.totp.verify(user.mfa_secret or "", req.token):
                self.log.info("auth.mfa_failed", extra={"user_id": user.id})
                raise InvalidMfaCodeError()

        self.log.info("auth.login", extra={"user_id": user.id, "mfa": user.mfa_enabled})
        return self._session_for(user)

    def refresh(self, refresh_token: str) -> AuthSession:
        try:
            user_id = self.tokens.verify_refresh(refresh_token)
        except InvalidTokenError as ex:
            raise InvalidTokenError("Invalid refresh token") from ex
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise InvalidTokenError("Invalid refresh token")
        return self._session_for(user)

    def authenticate(self, access_token: str) -> AuthContext:
        return AuthContext(user_id=self.tokens.verify_access(access_token))

    # --------- MFA lifecycle ----------
    def enroll_mfa(self, ctx: AuthContext) -> MfaSetup:
        user = self._require_user(ctx)
        if user.mfa_enabled:
            # the live secret only changes through disable_mfa, which needs a code
            raise ConflictError("MFA already enabled")
        enrollment = self.totp.generate_secret(user.email)
        # a second enrollment overwrites the pending secret
        self.user_repo.update(user.id, mfa_secret=enrollment.secret)
        self.log.info("auth.mfa_enroll", extra={"user_id": user.id})
        return MfaSetup(
            secret=enrollment.secret,
            qr_code_url=enrollment.provisioning_uri,
            qr_code=self.totp.qr_code_data_uri(enrollment.provisioning_uri),
        )

    def confirm_mfa(self, ctx: AuthContext, code: Optional[str]) -> UserSummary:
        user = self._require_mfa_secret(ctx)
        if not self.totp.verify(user.mfa_secret, code):
            raise InvalidMfaCodeError()
        updated = self.user_repo.update(user.id, mfa_enabled=True)
        self.log.info("auth.mfa_enabled", extra={"user_id": user.id})
        return UserSummary.from_record(updated)

    def disable_mfa(self, ctx: AuthContext, code: Optional[str]) -> UserSummary:
        user = self._require_mfa_secret(ctx)
        if not self.totp.verify(user.mfa_secret, code):
            raise InvalidMfaCodeError()
        updated = self.user_repo.update(user.id, mfa_enabled=False, mfa_secret=None)
        self.log.info("auth.mfa_disabled", extra={"user_id": user.id})
        return UserSummary.from_record(updated)

    # --------- Helpers ----------
    def _require_user(self, ctx: AuthContext) -> UserRecord:
        user = self.user_repo.find_by_id(ctx.user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def _require_mfa_secret(self, ctx: AuthContext) -> UserRecord:
        user = self.user_repo.find_by_id(ctx.user_id)
        if not user or not user.mfa_secret:
            raise NotFoundError("MFA not set up")
        return user

    def _session_for(self, user: UserRecord) -> AuthSession:
        return AuthSession(tokens=self.tokens.issue(user.id), user=UserSummary.from_record(user))
