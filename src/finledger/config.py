"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_exchange_rates(raw: str | None) -> dict[str, float]:
    """Parse ``CODE=rate`` pairs separated by commas into a rate table.

    Rates are expressed in units of the reporting currency per unit of the
    foreign currency, e.g. ``EUR=1.08,GBP=1.27``.
    """

    rates: dict[str, float] = {}
    if not raw:
        return rates
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        code, sep, value = chunk.partition("=")
        code = code.strip().upper()
        if not sep or len(code) != 3:
            raise ValueError(f"Invalid exchange rate entry: {chunk!r}")
        try:
            rate = float(value)
        except ValueError as exc:
            raise ValueError(f"Invalid exchange rate for {code}: {value!r}") from exc
        if rate <= 0:
            raise ValueError(f"Exchange rate for {code} must be positive")
        rates[code] = rate
    return rates


class BaseConfig:
    """Configuration read from FINLEDGER_* environment variables."""

    DB_FILENAME = "finledger.db"
    DEFAULT_PAGE_SIZE = 50

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("FINLEDGER_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("FINLEDGER_DATABASE_URL", self._build_sqlite_url())
        self.REPORTING_CURRENCY = os.getenv("FINLEDGER_REPORTING_CURRENCY", "USD").strip().upper()
        self.EXCHANGE_RATES = parse_exchange_rates(os.getenv("FINLEDGER_EXCHANGE_RATES"))
        self.JOURNALS_PER_PAGE = self._resolve_page_size()
        self.TIMEZONE = os.getenv("FINLEDGER_TIMEZONE", "UTC")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("FINLEDGER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _resolve_page_size(self) -> int:
        raw = os.getenv("FINLEDGER_JOURNALS_PER_PAGE")
        if raw is None:
            return self.DEFAULT_PAGE_SIZE
        try:
            size = int(raw)
        except ValueError as exc:
            raise ValueError(f"FINLEDGER_JOURNALS_PER_PAGE must be an integer, got {raw!r}") from exc
        if size < 1:
            raise ValueError("FINLEDGER_JOURNALS_PER_PAGE must be at least 1")
        return size

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options
