"""
Token ledger precondition validation service
"""

from src.models.token_account import TokenAccount
from src.utils.amounts import checked_add, checked_sub
from src.utils.exceptions import ERROR_MESSAGES, TokenErrorCodes, ValidationResult


class TokenValidator:
    """Check instruction preconditions without touching the account"""

    def validate_enable_trading(self, account: TokenAccount, caller: str) -> ValidationResult:
        if caller != account.creator:
            return ValidationResult(
                False,
                TokenErrorCodes.UNAUTHORIZED,
                ERROR_MESSAGES[TokenErrorCodes.UNAUTHORIZED],
            )
        return ValidationResult(True)

    def validate_trading_enabled(self, account: TokenAccount) -> ValidationResult:
        if not account.trading_enabled:
            return ValidationResult(
                False,
                TokenErrorCodes.TRADING_DISABLED,
                ERROR_MESSAGES[TokenErrorCodes.TRADING_DISABLED],
            )
        return ValidationResult(True)

    def validate_buy(self, account: TokenAccount, amount: int) -> ValidationResult:
        gate = self.validate_trading_enabled(account)
        if not gate:
            return gate

        if checked_add(account.circulating_supply, amount) is None:
            return self._overflow(f"circulating_supply {account.circulating_supply} + {amount}")
        if checked_add(account.trading_volume_24h, amount) is None:
            return self._overflow(f"trading_volume_24h {account.trading_volume_24h} + {amount}")

        return ValidationResult(True)

    def validate_sell(self, account: TokenAccount, amount: int) -> ValidationResult:
        gate = self.validate_trading_enabled(account)
        if not gate:
            return gate

        # No per-holder balance exists; only the global counter bounds a sell.
        if checked_sub(account.circulating_supply, amount) is None:
            return self._overflow(f"circulating_supply {account.circulating_supply} - {amount}")

        return ValidationResult(True)

    def _overflow(self, detail: str) -> ValidationResult:
        return ValidationResult(
            False,
            TokenErrorCodes.OVERFLOW,
            f"{ERROR_MESSAGES[TokenErrorCodes.OVERFLOW]}: {detail}",
        )
