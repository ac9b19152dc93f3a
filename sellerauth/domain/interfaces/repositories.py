"""Repository interfaces for abstracting data persistence in the domain layer.

These abstract base classes are the "ports" the domain talks to. Concrete
adapters (Redis documents, in-process dictionaries) live in the
``infrastructure`` layer.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sellerauth.domain.entities.seller_account import SellerAccount
from sellerauth.domain.entities.token_blacklist import BlacklistedToken
from sellerauth.domain.entities.user import User


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations.

    This repository manages the lifecycle of the `User` aggregate root. Every
    write replaces the whole document; concurrent writers for one user are
    last-write-wins.
    """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieves a user by their unique identifier.

        Args:
            user_id: The opaque ID of the user.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Retrieves a user by their email address (case-insensitively).

        Args:
            email: The email address to search for.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persists a new user.

        Raises:
            DuplicateEmailError: If another user already owns the email.
        """
        raise NotImplementedError

    @abstractmethod
    async def save(self, user: User) -> User:
        """Writes back an existing user, stamping ``updated_at``."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, user: User) -> None:
        """Removes a user and its email index entry."""
        raise NotImplementedError


class ITokenBlacklistRepository(ABC):
    """Contract for the store behind the token revocation registry."""

    @abstractmethod
    async def add(self, entry: BlacklistedToken) -> None:
        """Inserts a revocation entry that lives until ``entry.expires_at``.

        Raises:
            DuplicateBlacklistEntryError: If the token is already listed.
        """
        raise NotImplementedError

    @abstractmethod
    async def exists(self, token: str) -> bool:
        """Returns True if an unexpired entry exists for ``token``."""
        raise NotImplementedError


class ISellerAccountRepository(ABC):
    """Contract for seller credential persistence, keyed by seller id."""

    @abstractmethod
    async def get_by_seller_id(self, seller_id: str) -> Optional[SellerAccount]:
        raise NotImplementedError

    @abstractmethod
    async def upsert(self, account: SellerAccount) -> SellerAccount:
        """Creates the record for ``account.seller_id`` or replaces it in place."""
        raise NotImplementedError
