"""Exceptions raised by the ledger.

Fatal errors (``MissingAmountError``, ``PrecisionLossError``,
``TransactionParseError``) stop the batch and reach the caller. Everything
deriving from ``RecoverableError`` is handled inside the processor: it is
logged and the batch moves on.
"""


class LedgerError(Exception):
    """Base exception for all ledger errors."""
    pass


class MissingAmountError(LedgerError):
    """Raised when a deposit or withdrawal carries no amount."""

    def __init__(self, transaction_id: int):
        super().__init__(f"Invalid transaction data: missing amount (tx {transaction_id})")
        self.transaction_id = transaction_id


class TransactionParseError(LedgerError):
    """Raised when an input row cannot be turned into a transaction."""

    def __init__(self, line_number: int, reason: str):
        super().__init__(f"Line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason


class PrecisionLossError(LedgerError):
    """Raised when a balance cannot be represented exactly at ledger precision."""

    def __init__(self, transaction_id: int, precision: int):
        super().__init__(f"Transaction #{transaction_id}: balance exceeds {precision} significant digits")
        self.transaction_id = transaction_id
        self.precision = precision


class RecoverableError(LedgerError):
    """Base for failures that only drop the offending transaction."""
    pass


class TransactionLookupError(RecoverableError):
    """Raised when a dispute, resolve or chargeback cannot use its target transaction."""

    def __init__(self, transaction_id: int, message: str):
        super().__init__(message)
        self.transaction_id = transaction_id


class TransactionNotFoundError(TransactionLookupError):
    def __init__(self, transaction_id: int):
        super().__init__(transaction_id, f"Transaction #{transaction_id} not found")


class ClientMismatchError(TransactionLookupError):
    def __init__(self, transaction_id: int, expected_client_id: int, client_id: int):
        super().__init__(
            transaction_id,
            f"Transaction #{transaction_id} does not have matching client id "
            f"(belongs to {expected_client_id}, requested by {client_id})",
        )
        self.expected_client_id = expected_client_id
        self.client_id = client_id


class WrongStatusError(TransactionLookupError):
    def __init__(self, transaction_id: int, status, desired_status):
        super().__init__(
            transaction_id,
            f"Transaction #{transaction_id} not in desired state "
            f"(is {status.value}, needs {desired_status.value})",
        )
        self.status = status
        self.desired_status = desired_status


class DuplicateTransactionError(RecoverableError):
    """Raised when a deposit or withdrawal reuses a recorded transaction id."""

    def __init__(self, transaction_id: int):
        super().__init__(f"Transaction #{transaction_id} already recorded")
        self.transaction_id = transaction_id


class AccountLockedError(RecoverableError):
    """Raised when a transaction targets a locked account."""

    def __init__(self, client_id: int):
        super().__init__(f"Account {client_id} is locked")
        self.client_id = client_id
