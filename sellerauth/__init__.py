"""sellerauth: user accounts, JWT sessions and Amazon seller account linking."""

__version__ = "0.1.0"
