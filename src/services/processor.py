import time
from typing import Optional

import structlog

from src.models.token_account import DEFAULT_PRICE_IN_LAMPORTS, TokenAccount
from src.models.token_metadata import TokenMetadata
from src.utils.amounts import is_valid_u64
from src.utils.exceptions import ValidationResult, exception_from_result
from .error_handler import ErrorHandler
from .validator import TokenValidator


class TokenProcessor:
    """Apply the four token instructions to a loaded TokenAccount.

    The processor keeps no account state between calls. Every instruction
    validates first and only then assigns fields, so a rejected instruction
    leaves the account exactly as it was passed in.
    """

    def __init__(self, validator: Optional[TokenValidator] = None, error_handler: Optional[ErrorHandler] = None):
        self.validator = validator or TokenValidator()
        self.error_handler = error_handler or ErrorHandler()
        self.logger = structlog.get_logger()

    def initialize_token(
        self,
        metadata: TokenMetadata,
        supply: int,
        creator: str,
        now: Optional[int] = None,
    ) -> TokenAccount:
        """
        Create a new account with trading disabled and nothing in circulation.

        Name and symbol lengths are not checked here; the account allocator
        owns those limits.

        Raises:
            ValueError: If supply is not a u64
        """
        if not is_valid_u64(supply):
            raise ValueError(f"Invalid u64 amount: {supply!r}")

        account = TokenAccount(
            team_name=metadata.team_name,
            symbol=metadata.symbol,
            total_supply=supply,
            circulating_supply=0,
            creator=creator,
            created_at=int(time.time()) if now is None else now,
            price_in_lamports=DEFAULT_PRICE_IN_LAMPORTS,
            trading_enabled=False,
            trading_volume_24h=0,
        )

        self.logger.info(
            "Token initialized",
            team_name=account.team_name,
            symbol=account.symbol,
            total_supply=supply,
            creator=creator,
        )
        return account

    def enable_trading(self, account: TokenAccount, caller: str) -> TokenAccount:
        """Open trading. Only the creator may do this; repeating it is harmless."""
        self._require(
            self.validator.validate_enable_trading(account, caller),
            "enable_trading",
            account,
            caller=caller,
        )

        account.trading_enabled = True

        self.logger.info("Trading enabled", symbol=account.symbol, creator=account.creator)
        return account

    def buy_token(self, account: TokenAccount, amount: int, caller: str) -> TokenAccount:
        """Move amount into circulation and count it as volume. Any caller may buy."""
        self._require(
            self.validator.validate_buy(account, amount),
            "buy_token",
            account,
            amount=amount,
            caller=caller,
        )

        account.circulating_supply = account.circulating_supply + amount
        account.trading_volume_24h = account.trading_volume_24h + amount

        self.logger.info(
            "Token bought",
            symbol=account.symbol,
            amount=amount,
            caller=caller,
            circulating_supply=account.circulating_supply,
            trading_volume_24h=account.trading_volume_24h,
        )
        return account

    def sell_token(self, account: TokenAccount, amount: int, caller: str) -> TokenAccount:
        """Take amount out of circulation. Volume is left alone."""
        self._require(
            self.validator.validate_sell(account, amount),
            "sell_token",
            account,
            amount=amount,
            caller=caller,
        )

        account.circulating_supply = account.circulating_supply - amount

        self.logger.info(
            "Token sold",
            symbol=account.symbol,
            amount=amount,
            caller=caller,
            circulating_supply=account.circulating_supply,
        )
        return account

    def _require(self, result: ValidationResult, instruction: str, account: TokenAccount, **kwargs) -> None:
        if result:
            return
        error = exception_from_result(result)
        self.error_handler.handle_instruction_error(
            error,
            {"instruction": instruction, "address": account.address, "symbol": account.symbol, **kwargs},
        )
        raise error
