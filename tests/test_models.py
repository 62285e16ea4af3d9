import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    Transaction,
    TransactionType,
    TransactionStatus,
    TransactionRecord,
    ClientAccount,
    ProcessingResult,
    ProcessingStats,
)


class TestTransaction:
    def test_create_deposit(self):
        transaction = Transaction(
            transaction_type=TransactionType.DEPOSIT,
            client_id=1,
            transaction_id=1,
            amount=Decimal("100.0"),
        )
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 1
        assert transaction.amount == Decimal("100.0")

    def test_create_dispute_no_amount(self):
        transaction = Transaction(
            transaction_type=TransactionType.DISPUTE,
            client_id=1,
            transaction_id=1,
        )
        assert transaction.amount is None

    def test_immutable(self):
        transaction = Transaction(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("1"))
        with pytest.raises(AttributeError):
            transaction.amount = Decimal("2")


class TestTransactionRecord:
    def test_defaults_to_processed(self):
        transaction = Transaction(TransactionType.WITHDRAWAL, client_id=5, transaction_id=2, amount=Decimal("10"))
        record = TransactionRecord(transaction)
        assert record.status == TransactionStatus.PROCESSED
        assert record.client_id == 5
        assert record.amount == Decimal("10")


class TestClientAccount:
    def test_default_values(self):
        account = ClientAccount(client_id=1)
        assert account.available == Decimal("0")
        assert account.held == Decimal("0")
        assert account.total == Decimal("0")
        assert account.locked is False

    def test_total_property(self):
        account = ClientAccount(
            client_id=1,
            available=Decimal("100"),
            held=Decimal("50"),
        )
        assert account.total == Decimal("150")

    def test_hold_and_release_keep_total(self):
        account = ClientAccount(client_id=1, available=Decimal("30"))
        account.hold(Decimal("10"))
        assert (account.available, account.held, account.total) == (Decimal("20"), Decimal("10"), Decimal("30"))
        account.release_hold(Decimal("10"))
        assert (account.available, account.held, account.total) == (Decimal("30"), Decimal("0"), Decimal("30"))

    def test_charge_back_locks(self):
        account = ClientAccount(client_id=1, available=Decimal("5"), held=Decimal("10"))
        account.charge_back(Decimal("10"))
        assert account.held == Decimal("0")
        assert account.total == Decimal("5")
        assert account.available == Decimal("5")
        assert account.locked is True


class TestProcessingStats:
    def test_counts_by_result(self):
        stats = ProcessingStats()
        stats.record(ProcessingResult.SUCCESS)
        stats.record(ProcessingResult.SUCCESS)
        stats.record(ProcessingResult.IGNORED)
        stats.record(ProcessingResult.FAILED)
        assert stats.processed == 2
        assert stats.ignored == 1
        assert stats.failed == 1
        assert stats.seen == 4

    def test_enum_values(self):
        assert ProcessingResult.SUCCESS.value == "success"
        assert ProcessingResult.IGNORED.value == "ignored"
        assert ProcessingResult.FAILED.value == "failed"
