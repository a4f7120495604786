"""Authentication application service.

Handles user registration and login, issuing an access token for each.
"""

from dataclasses import dataclass
from typing import Any, Protocol

import structlog

from storefront.domain.addresses import validate_addresses
from storefront.domain.entities import User
from storefront.domain.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInputError,
)
from storefront.domain.value_objects import Role
from storefront.infrastructure.security import PasswordHasher, TokenIssuer

logger = structlog.get_logger()


class UserRepository(Protocol):
    async def save(self, user: User) -> User: ...

    async def get(self, user_id: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...


@dataclass
class AuthResult:
    """Result of a successful registration or login."""

    user: User
    token: str


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


class AuthService:
    """Application service for user registration and login.

    Password hashing and token signing are delegated to the injected
    ``PasswordHasher`` and ``TokenIssuer``.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenIssuer,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            users: User repository.
            hasher: Password hasher.
            tokens: Access token issuer.
            request_id: Request ID for correlation.
        """
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.request_id = request_id

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        phone: str,
        address: Any,
        role: Role | None = None,
    ) -> AuthResult:
        """Register a new user.

        Args:
            first_name: Given name.
            last_name: Family name.
            email: Login email.
            password: Plain-text password.
            phone: Contact phone number.
            address: One address mapping or a list of them.
            role: Optional role, defaults to ``user``.

        Returns:
            The new user and an access token.

        Raises:
            InvalidInputError: If a required field is blank.
            AddressValidationError: If the addresses are missing or malformed.
            ConflictError: If the email is already registered.
        """
        if not all(
            value and value.strip()
            for value in (first_name, last_name, email, password, phone)
        ) or not address:
            raise InvalidInputError("All fields are required")

        addresses = validate_addresses(address)
        addresses.raise_for_error()

        email = normalize_email(email)
        if await self.users.get_by_email(email) is not None:
            logger.warning(
                "Registration rejected: email in use",
                email=email,
                request_id=self.request_id,
            )
            raise ConflictError(
                "User with this email already exists",
                details={"email": email},
            )

        user = User.create(
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            email=email,
            password_hash=self.hasher.hash(password),
            phone=phone.strip(),
            addresses=addresses.addresses,
            role=role or Role.USER,
        )
        await self.users.save(user)

        logger.info(
            "User registered",
            user_id=user.id,
            role=user.role.value,
            request_id=self.request_id,
        )

        return AuthResult(user=user, token=self.tokens.issue(user.token_claims))

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate a user by email and password.

        Raises:
            InvalidInputError: If email or password is blank.
            InvalidCredentialsError: If the email is unknown or the password wrong.
        """
        if not email or not password:
            raise InvalidInputError("Email and password are required")

        user = await self.users.get_by_email(normalize_email(email))
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.warning("Login failed", request_id=self.request_id)
            raise InvalidCredentialsError()

        logger.info("User logged in", user_id=user.id, request_id=self.request_id)

        return AuthResult(user=user, token=self.tokens.issue(user.token_claims))
