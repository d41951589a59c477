"""
Token ledger exception handling and standardized error codes
"""


class TokenErrorCodes:
    """Standardized error codes for token ledger instructions"""

    # Instruction errors
    UNAUTHORIZED = "UNAUTHORIZED"
    TRADING_DISABLED = "TRADING_DISABLED"
    OVERFLOW = "OVERFLOW"

    # Host errors
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    ACCOUNT_ALREADY_EXISTS = "ACCOUNT_ALREADY_EXISTS"
    UNKNOWN_INSTRUCTION = "UNKNOWN_INSTRUCTION"


ERROR_MESSAGES = {
    TokenErrorCodes.UNAUTHORIZED: "Unauthorized action",
    TokenErrorCodes.TRADING_DISABLED: "Trading is disabled for this token",
    TokenErrorCodes.OVERFLOW: "Arithmetic overflow",
}


class ValidationResult:

    def __init__(self, is_valid: bool, error_code: str = None, error_message: str = None):
        self.is_valid = is_valid
        self.error_code = error_code
        self.error_message = error_message

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        if self.is_valid:
            return "ValidationResult(valid=True)"
        return f"ValidationResult(valid=False, error={self.error_code})"


class TokenLedgerException(Exception):

    def __init__(self, error_code: str, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"{error_code}: {message}")


class Unauthorized(TokenLedgerException):

    def __init__(self, message: str = None):
        super().__init__(
            TokenErrorCodes.UNAUTHORIZED,
            message or ERROR_MESSAGES[TokenErrorCodes.UNAUTHORIZED],
        )


class TradingDisabled(TokenLedgerException):

    def __init__(self, message: str = None):
        super().__init__(
            TokenErrorCodes.TRADING_DISABLED,
            message or ERROR_MESSAGES[TokenErrorCodes.TRADING_DISABLED],
        )


class Overflow(TokenLedgerException):
    """Checked arithmetic left the u64 range, in either direction"""

    def __init__(self, message: str = None):
        super().__init__(
            TokenErrorCodes.OVERFLOW,
            message or ERROR_MESSAGES[TokenErrorCodes.OVERFLOW],
        )


INSTRUCTION_EXCEPTIONS = {
    TokenErrorCodes.UNAUTHORIZED: Unauthorized,
    TokenErrorCodes.TRADING_DISABLED: TradingDisabled,
    TokenErrorCodes.OVERFLOW: Overflow,
}


def exception_from_result(result: ValidationResult) -> TokenLedgerException:
    """Build the typed exception matching a failed ValidationResult"""
    exc_class = INSTRUCTION_EXCEPTIONS.get(result.error_code)
    if exc_class is None:
        return TokenLedgerException(result.error_code, result.error_message)
    return exc_class(result.error_message)
