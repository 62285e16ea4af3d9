from typing import Dict, Optional

from exceptions import ClientMismatchError, TransactionNotFoundError, WrongStatusError
from models import Transaction, TransactionRecord, TransactionStatus, ClientAccount


class LedgerStore:
    """
    In-memory state for a single run.
    Stores client accounts and deposit/withdrawal history for dispute lookups.
    Owned by one processor; no locking.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, TransactionRecord] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def record_transaction(
        self,
        transaction_id: int,
        transaction: Transaction,
        status: TransactionStatus = TransactionStatus.PROCESSED,
    ) -> None:
        """Store or overwrite the record for transaction_id. Last write wins."""
        self._transactions[transaction_id] = TransactionRecord(transaction, status)

    def take_transaction_for_status(
        self,
        account: ClientAccount,
        transaction_id: int,
        desired_status: TransactionStatus,
    ) -> TransactionRecord:
        """
        Remove and return the record for transaction_id.

        The record must belong to account and be in desired_status; otherwise
        the store is left untouched and a TransactionLookupError subclass is
        raised. Callers re-record the transaction if they keep it.
        """
        record = self._transactions.get(transaction_id)

        if record is None:
            raise TransactionNotFoundError(transaction_id)

        if record.client_id != account.client_id:
            raise ClientMismatchError(transaction_id, record.client_id, account.client_id)

        if record.status != desired_status:
            raise WrongStatusError(transaction_id, record.status, desired_status)

        return self._transactions.pop(transaction_id)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionRecord]:
        """Retrieve stored record by ID without removing it."""
        return self._transactions.get(transaction_id)

    def has_transaction(self, transaction_id: int) -> bool:
        return transaction_id in self._transactions

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts in creation order (for final output)."""
        return dict(self._accounts)
