from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, EmailStr, Field, field_validator

from sellerauth.utils.clock import utc_now


class Role(str, Enum):
    """Represents the role of a user within the system.

    Attributes:
        ADMIN: Confers administrative privileges.
        USER: Represents a standard user.
    """

    ADMIN = "admin"
    USER = "user"


class OtpSlot(BaseModel):
    """A one-time code stored inside the user document.

    Attributes:
        code: The 6-digit code, kept as a string so leading zeros survive.
        expires_at: Instant after which the code is rejected.
        attempts: Number of verification attempts that reached the comparison.
    """

    code: str
    expires_at: datetime
    attempts: int = Field(default=0, ge=0)


class LinkedSellerAccount(BaseModel):
    """An Amazon seller credential owned by a user.

    Attributes:
        seller_id: Selling partner identifier the credential belongs to.
        refresh_token: Long-lived LWA refresh token.
        access_token: Current LWA access token.
        token_type: Token type returned by the provider.
        expires_in: Lifetime of ``access_token`` in seconds when it was issued.
        marketplace_ids: Marketplaces this credential is authorized for.
        created_at: When the account was linked.
    """

    seller_id: str
    refresh_token: str = Field(repr=False)
    access_token: str = Field(repr=False)
    token_type: str = "bearer"
    expires_in: int = Field(ge=0)
    marketplace_ids: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)


class User(BaseModel):
    """Represents a User entity and acts as an Aggregate Root.

    The user document embeds everything the authentication flows mutate: the
    verification and password-reset OTP slots, the lockout counters, the
    pointer to the latest issued session tokens and the linked seller
    accounts. Each flow loads the document, mutates it and saves it back
    as a whole.

    Attributes:
        id: Opaque unique identifier.
        name: Display name, 2 to 50 characters after trimming.
        email: Unique, case-insensitive email address, stored lowercase.
        password_hash: bcrypt hash. Only written through ``set_password``.
        role: The user's role.
        is_email_verified: Set once the verification OTP is accepted.
        is_active: Cleared by deactivation. Inactive users cannot log in.
        last_login: Timestamp of the last successful login.
        deactivated_at: Timestamp of the last deactivation.
        verification_otp: Pending email-verification code, if any.
        password_reset_otp: Pending password-reset code, if any.
        login_attempts: Consecutive failed password checks.
        is_locked: Whether the lockout policy has locked the account.
        lock_until: When the current lock lapses.
        access_token: Latest issued access token (informational).
        refresh_token: Latest issued refresh token (informational).
        amazon_accounts: Linked seller credentials.
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password_hash: Optional[str] = Field(default=None, repr=False)
    role: Role = Role.USER
    is_email_verified: bool = False
    is_active: bool = True
    last_login: Optional[datetime] = None
    deactivated_at: Optional[datetime] = None

    verification_otp: Optional[OtpSlot] = Field(default=None, repr=False)
    password_reset_otp: Optional[OtpSlot] = Field(default=None, repr=False)

    login_attempts: int = Field(default=0, ge=0)
    is_locked: bool = False
    lock_until: Optional[datetime] = None

    access_token: Optional[str] = Field(default=None, repr=False)
    refresh_token: Optional[str] = Field(default=None, repr=False)

    amazon_accounts: List[LinkedSellerAccount] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        """Stores emails trimmed and lowercase so lookups are case-insensitive."""
        return value.strip().lower() if isinstance(value, str) else value

    def set_password(self, raw_password: str, hasher) -> None:
        """Replace the stored credential with a fresh hash of ``raw_password``."""
        self.password_hash = hasher.hash(raw_password)

    def set_session_tokens(self, access_token: Optional[str], refresh_token: Optional[str]) -> None:
        self.access_token = access_token
        self.refresh_token = refresh_token

    def clear_session_tokens(self) -> None:
        self.set_session_tokens(None, None)

    def upsert_linked_account(self, account: LinkedSellerAccount) -> LinkedSellerAccount:
        """Add ``account`` or refresh the existing entry for the same seller.

        Marketplace ids accumulate across updates; the original link time is kept.
        """
        for index, existing in enumerate(self.amazon_accounts):
            if existing.seller_id == account.seller_id:
                merged = account.model_copy(
                    update={
                        "marketplace_ids": sorted(set(existing.marketplace_ids) | set(account.marketplace_ids)),
                        "created_at": existing.created_at,
                    }
                )
                self.amazon_accounts[index] = merged
                return merged
        self.amazon_accounts.append(account)
        return account

    def remove_linked_account(self, marketplace_id: str) -> bool:
        """Drop every linked account authorized for ``marketplace_id``."""
        remaining = [a for a in self.amazon_accounts if marketplace_id not in a.marketplace_ids]
        removed = len(remaining) != len(self.amazon_accounts)
        self.amazon_accounts = remaining
        return removed
