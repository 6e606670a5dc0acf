"""
JWT token issuance and validation.

Tokens are HS512-signed JWTs carrying ``id``, ``username`` and ``exp``.
The secret is handed to ``TokenService`` once at startup (from
``config.jwt_secret``, env var ``JWT_SECRET``) and never re-read.
"""

from __future__ import annotations

import time

import jwt as pyjwt
from pydantic import ValidationError

from core.errors import TokenExpired, TokenInvalid, TokenIssuanceFailure
from utils.schemas import Claims

DEFAULT_EXPIRY_MINUTES = 60


class TokenService:
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS512",
        expiry_minutes: int = DEFAULT_EXPIRY_MINUTES,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expiry_seconds = expiry_minutes * 60

    def issue(self, subject_id: int, username: str) -> str:
        """Create a signed token for ``subject_id`` expiring in one hour."""
        claims = Claims(
            subject_id=subject_id,
            username=username,
            exp=int(time.time()) + self._expiry_seconds,
        )
        try:
            return pyjwt.encode(
                claims.model_dump(by_alias=True),
                self._secret,
                algorithm=self._algorithm,
            )
        except (pyjwt.PyJWTError, TypeError, ValueError) as exc:
            raise TokenIssuanceFailure() from exc

    def validate(self, token: str) -> Claims:
        """
        Verify signature, algorithm and expiry and return the claims.

        Raises ``TokenExpired`` for a well-signed token past its expiry and
        ``TokenInvalid`` for everything else.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except pyjwt.PyJWTError as exc:
            raise TokenInvalid() from exc

        try:
            return Claims.model_validate(payload)
        except ValidationError as exc:
            raise TokenInvalid("token claims are incomplete") from exc
