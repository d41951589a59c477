"""
Error reporting service for the token ledger.

Rejected instructions and database failures are logged here; the caller
always re-raises afterwards so the host can abort its transaction.
"""

from typing import Any, Dict

import structlog

from src.utils.exceptions import TokenLedgerException


class ErrorHandler:
    """Report ledger errors"""

    def __init__(self):
        """Initialize the error handler"""
        self.logger = structlog.get_logger()

    def handle_instruction_error(self, error: TokenLedgerException, context: Dict[str, Any]) -> None:
        """
        Report an instruction rejected by its preconditions.

        Args:
            error: The typed ledger error
            context: Instruction name, account and arguments
        """
        self.logger.warning(
            "Instruction rejected",
            error_code=error.error_code,
            error=error.message,
            context=context,
        )

    def handle_database_error(self, error: Exception, context: Dict[str, Any]) -> None:
        """
        Report a database failure while loading or committing an account.

        Args:
            error: The exception that occurred
            context: Additional context about the error
        """
        self.logger.error("Database error occurred", error=str(error), context=context)
