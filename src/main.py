import csv
import sys
import logging
from decimal import Decimal
from typing import Dict, List, Optional, TextIO

from exceptions import LedgerError
from models import LEDGER_CONTEXT, ClientAccount
from payments_engine import PaymentsEngine
from settings import Settings

logger = logging.getLogger(__name__)

REPORT_HEADER = ["client", "available", "held", "total", "locked"]


def format_decimal(value: Decimal) -> str:
    """Format decimal exactly, removing trailing zeros and never using an exponent."""
    normalized = value.normalize(LEDGER_CONTEXT)
    if normalized.is_zero():
        return "0"
    return f"{normalized:f}"


def write_report(accounts: Dict[int, ClientAccount], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(REPORT_HEADER)
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        writer.writerow([
            client_id,
            format_decimal(account.available),
            format_decimal(account.held),
            format_decimal(account.total),
            str(account.locked).lower(),
        ])


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    try:
        settings = Settings.load()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    if len(args) != 1:
        print("Usage: ledger <input.csv>", file=sys.stderr)
        return 2

    engine = PaymentsEngine(settings=settings)
    try:
        accounts = engine.process_file(args[0])
    except (OSError, LedgerError) as e:
        logger.error(str(e))
        return 1

    write_report(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
