"""Configuration management for the ledger."""
import logging
import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass
class Settings:
    """Runtime settings for a ledger run.

    The strict policies are off by default so that duplicate transaction ids
    overwrite earlier history and locked accounts keep accepting transactions.
    """

    log_level: str = "WARNING"

    # Business Rules
    reject_duplicate_ids: bool = False
    reject_locked_accounts: bool = False

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        log_level = os.getenv("LEDGER_LOG_LEVEL", "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"LEDGER_LOG_LEVEL must be a logging level name, got {log_level!r}")

        return cls(
            log_level=log_level,
            reject_duplicate_ids=_parse_bool(
                "LEDGER_REJECT_DUPLICATE_IDS", os.getenv("LEDGER_REJECT_DUPLICATE_IDS", "")
            ),
            reject_locked_accounts=_parse_bool(
                "LEDGER_REJECT_LOCKED_ACCOUNTS", os.getenv("LEDGER_REJECT_LOCKED_ACCOUNTS", "")
            ),
        )
