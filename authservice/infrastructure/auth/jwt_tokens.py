# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JWT access token encoding and verification.

Tokens carry the user id in ``sub``, issue/expiry timestamps and a random
``jti`` so that two tokens minted in the same second never collide.
"""

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

import jwt

from authservice.domain.users.entities import SessionToken
from authservice.domain.users.exceptions import InvalidTokenError
from authservice.domain.users.repositories import TokenCodec


class JwtTokenCodec(TokenCodec):
    def __init__(
        self,
        *,
        secret: str,
        ttl: timedelta = timedelta(days=3),
        algorithm: str = "HS256",
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    def encode(self, user_id: int) -> SessionToken:
        now = datetime.now(UTC)
        expires_at = now + self._ttl
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": expires_at,
            "jti": secrets.token_hex(16),
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return SessionToken(user_id=user_id, token=token, expires_at=expires_at)

    def decode(self, token: str) -> SessionToken:
        """Verify signature and expiry, raising ``InvalidTokenError`` on any failure."""

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
            user_id = int(payload["sub"])
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(context={"reason": "expired"}) from exc
        except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
            raise InvalidTokenError(context={"reason": "invalid"}) from exc

        expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        return SessionToken(user_id=user_id, token=token, expires_at=expires_at)
