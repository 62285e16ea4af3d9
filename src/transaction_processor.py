import logging
from decimal import Decimal, Inexact
from typing import Optional

from exceptions import (
    AccountLockedError,
    DuplicateTransactionError,
    MissingAmountError,
    PrecisionLossError,
    RecoverableError,
)
from ledger_store import LedgerStore
from models import LEDGER_PRECISION, Transaction, TransactionType, TransactionStatus, ClientAccount, ProcessingResult
from settings import Settings

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions to the ledger store, one at a time.
    Returns ProcessingResult to indicate what happened.
    Raises MissingAmountError or PrecisionLossError, which must abort the batch.
    """

    def __init__(self, state: LedgerStore, settings: Optional[Settings] = None):
        self._state = state
        self._settings = settings or Settings()

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Applied to the account
            IGNORED: Dropped by policy without a diagnostic (insufficient funds)
            FAILED: Dropped after logging a diagnostic (lookup failure, strict policy)
        """
        account = self._state.get_or_create_account(transaction.client_id)

        if transaction.transaction_type in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
            self._require_amount(transaction)

        try:
            if self._settings.reject_locked_accounts and account.locked:
                raise AccountLockedError(account.client_id)

            match transaction.transaction_type:
                case TransactionType.DEPOSIT:
                    return self._handle_deposit(account, transaction)
                case TransactionType.WITHDRAWAL:
                    return self._handle_withdrawal(account, transaction)
                case TransactionType.DISPUTE:
                    return self._handle_dispute(account, transaction)
                case TransactionType.RESOLVE:
                    return self._handle_resolve(account, transaction)
                case TransactionType.CHARGEBACK:
                    return self._handle_chargeback(account, transaction)
        except RecoverableError as e:
            logger.warning(f"{transaction.transaction_type.value.capitalize()} tx {transaction.transaction_id}: {e}")
            return ProcessingResult.FAILED
        except Inexact:
            raise PrecisionLossError(transaction.transaction_id, LEDGER_PRECISION) from None

        raise ValueError(f"Unknown transaction type: {transaction.transaction_type!r}")

    def _require_amount(self, transaction: Transaction) -> Decimal:
        if transaction.amount is None:
            raise MissingAmountError(transaction.transaction_id)
        return transaction.amount

    def _check_duplicate(self, transaction: Transaction) -> None:
        if self._settings.reject_duplicate_ids and self._state.has_transaction(transaction.transaction_id):
            raise DuplicateTransactionError(transaction.transaction_id)

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        amount = self._require_amount(transaction)
        self._check_duplicate(transaction)

        account.credit(amount)
        self._state.record_transaction(transaction.transaction_id, transaction, TransactionStatus.PROCESSED)
        return ProcessingResult.SUCCESS

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        amount = self._require_amount(transaction)
        self._check_duplicate(transaction)

        if amount > account.available:
            logger.debug(f"Withdrawal tx {transaction.transaction_id}: insufficient funds, ignored")
            return ProcessingResult.IGNORED

        account.debit(amount)
        self._state.record_transaction(transaction.transaction_id, transaction, TransactionStatus.PROCESSED)
        return ProcessingResult.SUCCESS

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        record = self._state.take_transaction_for_status(
            account, transaction.transaction_id, TransactionStatus.PROCESSED
        )
        amount = self._require_amount(record.transaction)

        account.hold(amount)
        self._state.record_transaction(transaction.transaction_id, record.transaction, TransactionStatus.DISPUTED)
        return ProcessingResult.SUCCESS

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        record = self._state.take_transaction_for_status(
            account, transaction.transaction_id, TransactionStatus.DISPUTED
        )
        amount = self._require_amount(record.transaction)

        account.release_hold(amount)
        self._state.record_transaction(transaction.transaction_id, record.transaction, TransactionStatus.PROCESSED)
        return ProcessingResult.SUCCESS

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        record = self._state.take_transaction_for_status(
            account, transaction.transaction_id, TransactionStatus.DISPUTED
        )
        amount = self._require_amount(record.transaction)

        account.charge_back(amount)
        self._state.record_transaction(transaction.transaction_id, record.transaction, TransactionStatus.PROCESSED)
        return ProcessingResult.SUCCESS
