from dataclasses import dataclass
from decimal import Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow
from enum import Enum
from typing import Optional

# Balance arithmetic signals Inexact instead of rounding silently.
LEDGER_PRECISION = 100
LEDGER_CONTEXT = Context(prec=LEDGER_PRECISION, traps=[InvalidOperation, DivisionByZero, Overflow, Inexact])


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class TransactionStatus(Enum):
    PROCESSED = "processed"
    DISPUTED = "disputed"


class ProcessingResult(Enum):
    SUCCESS = "success"
    IGNORED = "ignored"
    FAILED = "failed"


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class TransactionRecord:
    """A stored deposit or withdrawal together with its current dispute status."""

    transaction: Transaction
    status: TransactionStatus = TransactionStatus.PROCESSED

    @property
    def client_id(self) -> int:
        return self.transaction.client_id

    @property
    def amount(self) -> Optional[Decimal]:
        return self.transaction.amount


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return LEDGER_CONTEXT.add(self.available, self.held)

    def credit(self, amount: Decimal) -> None:
        self.available = LEDGER_CONTEXT.add(self.available, amount)

    def debit(self, amount: Decimal) -> None:
        self.available = LEDGER_CONTEXT.subtract(self.available, amount)

    def hold(self, amount: Decimal) -> None:
        available = LEDGER_CONTEXT.subtract(self.available, amount)
        held = LEDGER_CONTEXT.add(self.held, amount)
        self.available, self.held = available, held

    def release_hold(self, amount: Decimal) -> None:
        held = LEDGER_CONTEXT.subtract(self.held, amount)
        available = LEDGER_CONTEXT.add(self.available, amount)
        self.available, self.held = available, held

    def charge_back(self, amount: Decimal) -> None:
        """Remove held funds for good and freeze the account."""
        self.held = LEDGER_CONTEXT.subtract(self.held, amount)
        self.locked = True


class ProcessingStats:
    """Counters for a single batch run."""

    def __init__(self):
        self.processed = 0
        self.ignored = 0
        self.failed = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.SUCCESS:
            self.processed += 1
        elif result == ProcessingResult.IGNORED:
            self.ignored += 1
        elif result == ProcessingResult.FAILED:
            self.failed += 1

    @property
    def seen(self) -> int:
        return self.processed + self.ignored + self.failed

    def __repr__(self) -> str:
        return f"ProcessingStats(processed={self.processed}, ignored={self.ignored}, failed={self.failed})"
