from __future__ import annotations
import uuid
from typing import Any, Dict

import jwt

from ..errors import ExpiredTokenError, InvalidSignatureError, MalformedTokenError
from .contracts import ClockPort, TokenClaims, TokenPair

ACCESS = "access"
REFRESH = "refresh"


class TokenIssuer:
    """
    Mints and checks the access/refresh JWT pair for a user id.

    Access and refresh tokens are signed with different secrets, so one can
    never stand in for the other. Expiry is judged against the injected clock:
    a token is expired from its `exp` second onward. Nothing is persisted, so
    a token stays valid until it expires.
    """
    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        clock: ClockPort,
        access_ttl_seconds: int = 3600,
        refresh_ttl_seconds: int = 604800,
        algorithm: str = "HS256",
    ):
        if not access_secret or not refresh_secret:
            raise ValueError("TokenIssuer requires non-empty access and refresh secrets")
        self._secrets = {ACCESS: access_secret, REFRESH: refresh_secret}
        self._ttls = {ACCESS: access_ttl_seconds, REFRESH: refresh_ttl_seconds}
        self.clock = clock
        self.algorithm = algorithm

    def issue(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self._sign(user_id, ACCESS),
            refresh_token=self._sign(user_id, REFRESH),
        )

    def verify_access(self, token: str) -> str:
        return self._verify(token, ACCESS)

    def verify_refresh(self, token: str) -> str:
        return self._verify(token, REFRESH)

    def _sign(self, user_id: str, typ: str) -> str:
        now = self.clock.now_utc_ts()
        claims = TokenClaims(
            sub=user_id,
            typ=typ,
            iat=now,
            exp=now + self._ttls[typ],
            jti=uuid.uuid4().hex,
        )
        return jwt.encode(claims.model_dump(), self._secrets[typ], algorithm=self.algorithm)

    def _verify(self, token: str, typ: str) -> str:
        try:
            payload: Dict[str, Any] = jwt.decode(
                token,
                self._secrets[typ],
                algorithms=[self.algorithm],
                # time checks run against our own clock below
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "typ", "iat", "exp"],
                },
            )
        except jwt.InvalidSignatureError:
            raise InvalidSignatureError()
        except jwt.InvalidTokenError:
            raise MalformedTokenError()

        try:
            claims = TokenClaims(**payload)
        except (TypeError, ValueError):
            raise MalformedTokenError()
        if claims.typ != typ:
            raise MalformedTokenError()
        if self.clock.now_utc_ts() >= claims.exp:
            raise ExpiredTokenError()
        return claims.sub
