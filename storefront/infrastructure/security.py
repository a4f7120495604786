"""Password hashing and access tokens.

Thin adapters over bcrypt and PyJWT. The rest of the application only
sees ``hash``/``verify`` and ``issue``/``decode``.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from storefront.domain.exceptions import InvalidTokenError, TokenExpiredError
from storefront.infrastructure.config import settings


class PasswordHasher:
    """Hashes and verifies user passwords with bcrypt."""

    def __init__(self, rounds: int | None = None) -> None:
        """Initialize hasher.

        Args:
            rounds: bcrypt cost factor, defaults to the configured value.
        """
        self.rounds = rounds or settings.bcrypt_rounds

    def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain-text password.

        Returns:
            Encoded bcrypt hash.
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False


class TokenIssuer:
    """Issues and verifies signed access tokens (JWT).

    Example usage:
        issuer = TokenIssuer()
        token = issuer.issue({"sub": user.id, "email": user.email, "role": "user"})
        claims = issuer.decode(token)
    """

    def __init__(
        self,
        secret: str | None = None,
        algorithm: str | None = None,
        expires_in: timedelta | None = None,
    ) -> None:
        """Initialize issuer.

        Args:
            secret: Signing secret, defaults to the configured value.
            algorithm: JWT signing algorithm.
            expires_in: Token lifetime.
        """
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expires_in = expires_in or timedelta(seconds=settings.jwt_expires_in_seconds)

    def issue(self, claims: dict[str, Any]) -> str:
        """Sign claims into a token.

        Args:
            claims: Claims to embed; ``iat`` and ``exp`` are added.

        Returns:
            Encoded token.
        """
        now = datetime.now(timezone.utc)
        payload = {**claims, "iat": now, "exp": now + self.expires_in}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """Verify a token and return its claims.

        Raises:
            TokenExpiredError: If the token is past its expiry.
            InvalidTokenError: If the token is malformed or badly signed.
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e


_password_hasher: PasswordHasher | None = None
_token_issuer: TokenIssuer | None = None


def get_password_hasher() -> PasswordHasher:
    """Get password hasher singleton."""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = PasswordHasher()
    return _password_hasher


def get_token_issuer() -> TokenIssuer:
    """Get token issuer singleton."""
    global _token_issuer
    if _token_issuer is None:
        _token_issuer = TokenIssuer()
    return _token_issuer
