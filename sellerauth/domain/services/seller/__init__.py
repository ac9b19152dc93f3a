from .seller_credentials import SellerCredentialLinker

__all__ = ["SellerCredentialLinker"]
