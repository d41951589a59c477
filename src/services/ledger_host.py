"""
Reference host for the token ledger.

Loads one TokenAccount per call with exclusive access, dispatches the
instruction to TokenProcessor and commits only when it succeeds.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.token_account import TokenAccount
from src.models.token_metadata import TokenMetadata
from src.utils.exceptions import TokenErrorCodes, TokenLedgerException
from .processor import TokenProcessor


class Instruction(str, Enum):

    INITIALIZE_TOKEN = "initialize_token"
    ENABLE_TRADING = "enable_trading"
    BUY_TOKEN = "buy_token"
    SELL_TOKEN = "sell_token"


class LedgerHost:
    def __init__(self, db_session: Session, processor: Optional[TokenProcessor] = None):
        self.db = db_session
        self.processor = processor or TokenProcessor()
        self.error_handler = self.processor.error_handler
        self.logger = structlog.get_logger()

    def create(
        self,
        address: str,
        metadata: TokenMetadata,
        supply: int,
        creator: str,
        now: Optional[int] = None,
    ) -> TokenAccount:
        """Run initialize_token and store the new account under address"""
        existing = self.db.query(TokenAccount).filter(TokenAccount.address == address).first()
        if existing is not None:
            raise TokenLedgerException(
                TokenErrorCodes.ACCOUNT_ALREADY_EXISTS,
                f"Account '{address}' already exists",
            )

        account = self.processor.initialize_token(metadata, supply, creator, now=now)
        account.address = address

        try:
            self.db.add(account)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise TokenLedgerException(
                TokenErrorCodes.ACCOUNT_ALREADY_EXISTS,
                f"Account '{address}' already exists",
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            self.error_handler.handle_database_error(e, {"instruction": Instruction.INITIALIZE_TOKEN.value, "address": address})
            raise

        self.logger.info("Account created", address=address, symbol=account.symbol)
        return account

    def load(self, address: str) -> TokenAccount:
        """Load an account locked for the rest of the transaction"""
        account = (
            self.db.query(TokenAccount)
            .filter(TokenAccount.address == address)
            .with_for_update()
            .first()
        )
        if account is None:
            raise TokenLedgerException(
                TokenErrorCodes.ACCOUNT_NOT_FOUND,
                f"Account '{address}' not found",
            )
        return account

    def execute(
        self,
        address: str,
        instruction: Union[Instruction, str],
        caller: str,
        amount: Optional[int] = None,
    ) -> TokenAccount:
        """
        Apply one instruction to the account at address.

        The account is committed only if the instruction succeeds; on any
        error the transaction is rolled back and the error re-raised.
        """
        try:
            instruction = Instruction(instruction)
        except ValueError:
            raise TokenLedgerException(
                TokenErrorCodes.UNKNOWN_INSTRUCTION,
                f"Unknown instruction: {instruction}",
            ) from None

        try:
            account = self.load(address)
            if instruction == Instruction.ENABLE_TRADING:
                self.processor.enable_trading(account, caller)
            elif instruction == Instruction.BUY_TOKEN:
                self.processor.buy_token(account, amount, caller)
            elif instruction == Instruction.SELL_TOKEN:
                self.processor.sell_token(account, amount, caller)
            else:
                raise TokenLedgerException(
                    TokenErrorCodes.UNKNOWN_INSTRUCTION,
                    f"{instruction.value} cannot run against an existing account",
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.error_handler.handle_database_error(e, {"instruction": instruction.value, "address": address})
            raise
        except Exception:
            self.db.rollback()
            raise

        return account

    def get_token(self, address: str) -> Dict[str, Any]:
        account = self.db.query(TokenAccount).filter(TokenAccount.address == address).first()
        if account is None:
            raise TokenLedgerException(
                TokenErrorCodes.ACCOUNT_NOT_FOUND,
                f"Account '{address}' not found",
            )
        return account.to_dict()
