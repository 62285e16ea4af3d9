import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, Optional, TextIO

from exceptions import TransactionParseError
from ledger_store import LedgerStore
from models import Transaction, TransactionType, ClientAccount, ProcessingStats
from settings import Settings
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx")


class PaymentsEngine:
    """
    Drives a batch of transactions through the processor, strictly in input order.
    The first fatal error stops the batch; nothing after it is applied.
    """

    def __init__(self, settings: Optional[Settings] = None, store: Optional[LedgerStore] = None):
        self._settings = settings or Settings()
        self._state = store if store is not None else LedgerStore()
        self._processor = TransactionProcessor(self._state, self._settings)

    @property
    def store(self) -> LedgerStore:
        return self._state

    def batch_process(self, transactions: Iterable[Transaction]) -> ProcessingStats:
        """Apply every transaction in order. Fatal LedgerErrors propagate to the caller."""
        stats = ProcessingStats()

        for transaction in transactions:
            result = self._processor.process_transaction(transaction)
            stats.record(result)

        logger.info(
            f"Processed: {stats.processed}, "
            f"Ignored: {stats.ignored}, "
            f"Failed: {stats.failed}"
        )
        return stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Reading transactions from {filepath}")
        with open(filepath, "r", encoding="utf-8", newline="") as f:
            self.batch_process(read_transactions(f))

        return self.get_all_accounts()

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        return self._state.get_all_accounts()


def read_transactions(stream: TextIO) -> Iterator[Transaction]:
    """Lazily parse CSV rows (header: type, client, tx, amount) into transactions."""
    reader = csv.DictReader(stream)
    try:
        if reader.fieldnames is None:
            return

        fieldnames = [name.strip().lower() for name in reader.fieldnames]
        missing = [column for column in REQUIRED_COLUMNS if column not in fieldnames]
        if missing:
            raise TransactionParseError(reader.line_num, f"missing column(s): {', '.join(missing)}")
        reader.fieldnames = fieldnames

        for row in reader:
            yield parse_csv_row(row, reader.line_num)
    except csv.Error as e:
        raise TransactionParseError(reader.line_num, str(e)) from None
    except UnicodeDecodeError as e:
        raise TransactionParseError(reader.line_num + 1, f"input is not valid UTF-8 ({e.reason})") from None


def parse_csv_row(row: Dict[Optional[str], Optional[str]], line_number: int) -> Transaction:
    """Parse CSV row into Transaction. An empty or absent amount stays None."""
    normalized = {k: (v or "").strip() for k, v in row.items() if isinstance(k, str)}

    try:
        transaction_type = TransactionType(normalized["type"].lower())
    except ValueError:
        raise TransactionParseError(line_number, f"unknown transaction type {normalized['type']!r}")

    client_id = _parse_id(normalized["client"], "client", line_number)
    transaction_id = _parse_id(normalized["tx"], "tx", line_number)

    amount = None
    amount_str = normalized.get("amount", "")
    if amount_str:
        try:
            amount = Decimal(amount_str)
        except InvalidOperation:
            raise TransactionParseError(line_number, f"invalid amount {amount_str!r}")
        if not amount.is_finite():
            raise TransactionParseError(line_number, f"invalid amount {amount_str!r}")

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_id(value: str, column: str, line_number: int) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise TransactionParseError(line_number, f"invalid {column} id {value!r}")
    if parsed < 0:
        raise TransactionParseError(line_number, f"invalid {column} id {value!r}")
    return parsed
