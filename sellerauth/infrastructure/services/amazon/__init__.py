from .token_client import AmazonTokenClient

__all__ = ["AmazonTokenClient"]
