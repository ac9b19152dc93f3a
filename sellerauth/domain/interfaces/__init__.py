"""Ports the domain depends on."""

from .repositories import (
    ISellerAccountRepository,
    ITokenBlacklistRepository,
    IUserRepository,
)
from .services import IEmailSender, ISellerTokenExchanger

__all__ = [
    "IUserRepository",
    "ITokenBlacklistRepository",
    "ISellerAccountRepository",
    "IEmailSender",
    "ISellerTokenExchanger",
]
