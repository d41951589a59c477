from .base import Base, U64
from .token_account import TokenAccount, DEFAULT_PRICE_IN_LAMPORTS
from .token_metadata import TokenMetadata

__all__ = [
    "Base",
    "U64",
    "TokenAccount",
    "DEFAULT_PRICE_IN_LAMPORTS",
    "TokenMetadata",
]
