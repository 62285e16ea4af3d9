import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from exceptions import (
    ClientMismatchError,
    TransactionLookupError,
    TransactionNotFoundError,
    WrongStatusError,
)
from ledger_store import LedgerStore
from models import Transaction, TransactionType, TransactionStatus


def make_deposit(client_id: int, transaction_id: int, amount: str = "10") -> Transaction:
    return Transaction(TransactionType.DEPOSIT, client_id=client_id, transaction_id=transaction_id, amount=Decimal(amount))


class TestLedgerStore:
    def setup_method(self):
        self.store = LedgerStore()

    def test_get_or_create_account_creates_zero_account(self):
        account = self.store.get_or_create_account(7)
        assert account.client_id == 7
        assert account.total == Decimal("0")
        assert account.locked is False

    def test_get_or_create_account_returns_same_instance(self):
        first = self.store.get_or_create_account(7)
        first.credit(Decimal("5"))
        assert self.store.get_or_create_account(7) is first
        assert len(self.store.get_all_accounts()) == 1

    def test_accounts_keep_creation_order(self):
        for client_id in (3, 1, 2):
            self.store.get_or_create_account(client_id)
        assert list(self.store.get_all_accounts()) == [3, 1, 2]

    def test_record_transaction_overwrites(self):
        self.store.record_transaction(1, make_deposit(1, 1, "10"))
        self.store.record_transaction(1, make_deposit(2, 1, "99"))

        record = self.store.get_transaction(1)
        assert record.client_id == 2
        assert record.amount == Decimal("99")
        assert record.status == TransactionStatus.PROCESSED

    def test_take_transaction_for_status_removes_record(self):
        account = self.store.get_or_create_account(1)
        self.store.record_transaction(1, make_deposit(1, 1))

        record = self.store.take_transaction_for_status(account, 1, TransactionStatus.PROCESSED)

        assert record.transaction.transaction_id == 1
        assert not self.store.has_transaction(1)

    def test_take_missing_transaction(self):
        account = self.store.get_or_create_account(1)
        with pytest.raises(TransactionNotFoundError):
            self.store.take_transaction_for_status(account, 42, TransactionStatus.PROCESSED)

    def test_take_transaction_of_other_client_leaves_store_unchanged(self):
        account = self.store.get_or_create_account(15)
        self.store.record_transaction(2, make_deposit(5, 2))

        with pytest.raises(ClientMismatchError) as excinfo:
            self.store.take_transaction_for_status(account, 2, TransactionStatus.PROCESSED)

        assert excinfo.value.expected_client_id == 5
        assert excinfo.value.client_id == 15
        assert self.store.get_transaction(2).status == TransactionStatus.PROCESSED

    def test_take_transaction_in_wrong_status_leaves_store_unchanged(self):
        account = self.store.get_or_create_account(1)
        self.store.record_transaction(1, make_deposit(1, 1), TransactionStatus.DISPUTED)

        with pytest.raises(WrongStatusError):
            self.store.take_transaction_for_status(account, 1, TransactionStatus.PROCESSED)

        assert self.store.get_transaction(1).status == TransactionStatus.DISPUTED

    def test_lookup_errors_share_base_class(self):
        for error in (TransactionNotFoundError, ClientMismatchError, WrongStatusError):
            assert issubclass(error, TransactionLookupError)
