# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential service: password hashing plus the access-token lifecycle."""

from __future__ import annotations

import hashlib
from datetime import UTC, datetime

from authservice.domain.users.entities import SessionToken
from authservice.domain.users.exceptions import InvalidTokenError
from authservice.domain.users.repositories import (
    PasswordHasher,
    RevokedTokenRepository,
    TokenCodec,
)
from authservice.shared.logging import logger


def token_fingerprint(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class CredentialService:
    def __init__(
        self,
        *,
        password_hasher: PasswordHasher,
        codec: TokenCodec,
        revoked: RevokedTokenRepository,
    ) -> None:
        self._password_hasher = password_hasher
        self._codec = codec
        self._revoked = revoked

    def hash(self, password: str) -> str:
        return self._password_hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self._password_hasher.verify(password, hashed)

    def issue_token(self, user_id: int) -> SessionToken:
        issued = self._codec.encode(user_id)
        logger.info(
            f"Issued token for user={user_id} exp={issued.expires_at.isoformat()} "
            f"fp={token_fingerprint(issued.token)[:8]}"
        )
        return issued

    def validate_token(self, token: str) -> int:
        """Return the user id the token was issued to.

        Raises ``InvalidTokenError`` when the signature does not verify, the
        token has expired, or it was revoked by a logout.
        """

        claims = self._codec.decode(token)
        if self._revoked.contains(token_fingerprint(token)):
            logger.debug(f"token.validate: revoked token for user={claims.user_id}")
            raise InvalidTokenError(context={"reason": "revoked"})
        return claims.user_id

    def revoke(self, token: str) -> None:
        try:
            claims = self._codec.decode(token)
        except InvalidTokenError:
            # expired or forged tokens are already unusable
            logger.debug("token.revoke: nothing to revoke")
            return

        self._revoked.add(token_fingerprint(token), claims.user_id, claims.expires_at)
        purged = self._revoked.purge_expired(datetime.now(UTC))
        logger.info(f"token.revoke: user={claims.user_id} purged_expired={purged}")
