from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from .base import Base, U64

DEFAULT_PRICE_IN_LAMPORTS = 1000  # 0.000001 SOL


class TokenAccount(Base):
    """Supply and trading state of one token."""

    __tablename__ = "token_accounts"

    # Byte budget of the on-chain account layout. Informational only.
    SPACE = (
        8  # discriminator
        + 32  # creator pubkey
        + 8  # timestamps
        + 8  # supply values (2x)
        + 8  # price
        + 8  # volume
        + 1  # bool
        + (4 + 50)  # team name (string)
        + (4 + 10)  # symbol (string)
    )
    MAX_TEAM_NAME_BYTES = 50
    MAX_SYMBOL_BYTES = 10

    id = Column(Integer, primary_key=True, autoincrement=True)
    address = Column(String(64), unique=True, index=True, nullable=False)
    team_name = Column(String(MAX_TEAM_NAME_BYTES), nullable=False)
    symbol = Column(String(MAX_SYMBOL_BYTES), nullable=False)
    total_supply = Column(U64, nullable=False)
    circulating_supply = Column(U64, nullable=False, default=0)
    creator = Column(String(64), nullable=False, index=True)
    created_at = Column(BigInteger, nullable=False, comment="Unix timestamp (seconds) from the host clock")
    price_in_lamports = Column(U64, nullable=False, default=DEFAULT_PRICE_IN_LAMPORTS)
    trading_enabled = Column(Boolean, nullable=False, default=False)
    trading_volume_24h = Column(U64, nullable=False, default=0)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return (
            f"TokenAccount(address={self.address!r}, symbol={self.symbol!r}, "
            f"circulating_supply={self.circulating_supply}, trading_enabled={self.trading_enabled})"
        )

    def to_dict(self) -> dict:
        """Public view of the record, as served to clients"""
        return {
            "address": self.address,
            "team_name": self.team_name,
            "symbol": self.symbol,
            "total_supply": self.total_supply,
            "circulating_supply": self.circulating_supply,
            "creator": self.creator,
            "created_at": self.created_at,
            "price_in_lamports": self.price_in_lamports,
            "trading_enabled": self.trading_enabled,
            "trading_volume_24h": self.trading_volume_24h,
        }
