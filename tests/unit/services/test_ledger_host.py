"""
Tests for LedgerHost against a SQLite session.
"""

from unittest.mock import Mock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.models.token_account import TokenAccount
from src.services.ledger_host import Instruction, LedgerHost
from src.utils.amounts import U64_MAX
from src.utils.exceptions import Overflow, TokenErrorCodes, TokenLedgerException, TradingDisabled, Unauthorized

ADDRESS = "FiFaTok3nArg1111111111111111111111111111111"


class TestLedgerHost:

    @pytest.fixture
    def host(self, db_session):
        return LedgerHost(db_session)

    @pytest.fixture
    def created(self, host, metadata, creator):
        return host.create(ADDRESS, metadata, 1_000_000, creator, now=1_700_000_000)

    def test_create_persists_account(self, host, created, db_session, creator):
        stored = db_session.query(TokenAccount).filter_by(address=ADDRESS).one()
        assert stored.total_supply == 1_000_000
        assert stored.circulating_supply == 0
        assert stored.creator == creator
        assert stored.trading_enabled is False
        assert stored.price_in_lamports == 1000

    def test_create_duplicate_address(self, host, created, metadata, creator):
        with pytest.raises(TokenLedgerException) as exc_info:
            host.create(ADDRESS, metadata, 5, creator)
        assert exc_info.value.error_code == TokenErrorCodes.ACCOUNT_ALREADY_EXISTS

    def test_load_missing(self, host):
        with pytest.raises(TokenLedgerException) as exc_info:
            host.load("missing")
        assert exc_info.value.error_code == TokenErrorCodes.ACCOUNT_NOT_FOUND

    def test_full_lifecycle(self, host, created, creator, trader):
        host.execute(ADDRESS, Instruction.ENABLE_TRADING, creator)
        host.execute(ADDRESS, Instruction.BUY_TOKEN, trader, amount=500)
        host.execute(ADDRESS, "sell_token", trader, amount=200)

        token = host.get_token(ADDRESS)
        assert token["trading_enabled"] is True
        assert token["circulating_supply"] == 300
        assert token["trading_volume_24h"] == 500

        with pytest.raises(Overflow):
            host.execute(ADDRESS, Instruction.SELL_TOKEN, trader, amount=10_000)
        assert host.get_token(ADDRESS) == token

    def test_rejected_instruction_is_not_committed(self, host, created, db_session, trader):
        with pytest.raises(Unauthorized):
            host.execute(ADDRESS, Instruction.ENABLE_TRADING, trader)
        with pytest.raises(TradingDisabled):
            host.execute(ADDRESS, Instruction.BUY_TOKEN, trader, amount=1)

        stored = db_session.query(TokenAccount).filter_by(address=ADDRESS).one()
        assert stored.trading_enabled is False
        assert stored.circulating_supply == 0

    def test_u64_values_round_trip(self, host, created, creator, trader):
        host.execute(ADDRESS, Instruction.ENABLE_TRADING, creator)
        host.execute(ADDRESS, Instruction.BUY_TOKEN, trader, amount=U64_MAX)
        assert host.get_token(ADDRESS)["circulating_supply"] == U64_MAX

        with pytest.raises(Overflow):
            host.execute(ADDRESS, Instruction.BUY_TOKEN, trader, amount=1)
        assert host.get_token(ADDRESS)["trading_volume_24h"] == U64_MAX

    def test_unknown_instruction(self, host, created, creator):
        with pytest.raises(TokenLedgerException) as exc_info:
            host.execute(ADDRESS, "burn_token", creator)
        assert exc_info.value.error_code == TokenErrorCodes.UNKNOWN_INSTRUCTION
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True

    def test_initialize_not_dispatched_on_existing_account(self, host, created, creator):
        with pytest.raises(TokenLedgerException) as exc_info:
            host.execute(ADDRESS, Instruction.INITIALIZE_TOKEN, creator)
        assert exc_info.value.error_code == TokenErrorCodes.UNKNOWN_INSTRUCTION

    def test_get_token_missing(self, host):
        with pytest.raises(TokenLedgerException) as exc_info:
            host.get_token("missing")
        assert exc_info.value.error_code == TokenErrorCodes.ACCOUNT_NOT_FOUND

    def test_database_error_rolls_back_and_reraises(self, host, created, creator):
        with patch.object(host.db, "commit", side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))):
            with patch.object(host.error_handler, "handle_database_error") as mock_handle:
                with pytest.raises(OperationalError):
                    host.execute(ADDRESS, Instruction.ENABLE_TRADING, creator)
                mock_handle.assert_called_once()

        assert host.get_token(ADDRESS)["trading_enabled"] is False

    def test_uses_given_processor(self, db_session, metadata, creator):
        processor = Mock()
        processor.initialize_token.return_value = TokenAccount(
            team_name="Brazil",
            symbol="BRA",
            total_supply=10,
            circulating_supply=0,
            creator=creator,
            created_at=0,
            price_in_lamports=1000,
            trading_enabled=False,
            trading_volume_24h=0,
        )
        host = LedgerHost(db_session, processor=processor)

        host.create("bra", metadata, 10, creator, now=0)

        processor.initialize_token.assert_called_once_with(metadata, 10, creator, now=0)
        assert host.get_token("bra")["symbol"] == "BRA"

    def test_account_requires_address(self, db_session, processor, metadata, creator):
        account = processor.initialize_token(metadata, 10, creator, now=0)
        db_session.add(account)
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()
