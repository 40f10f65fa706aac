"""Runtime configuration, read once from the environment.

Values come from ``STOREOPS_*`` environment variables; a ``.env`` file in
the working directory (or the one passed to ``load_settings``) is loaded
first without overriding variables that are already set.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

BACKENDS = ("sql", "json")
ISOLATION_LEVELS = (
    "SERIALIZABLE",
    "REPEATABLE READ",
    "READ COMMITTED",
    "READ UNCOMMITTED",
)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_PREFIX_RE = re.compile(r"^[A-Z]+$")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class ConfigurationError(ValueError):
    """An environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    backend: str = "sql"
    database_url: str = f"sqlite:///{_DATA_DIR / 'storeops.db'}"
    data_file: Path = _DATA_DIR / "storeops.json"
    isolation_level: str = "SERIALIZABLE"
    atomic_confirmation: bool = True
    invoice_prefix: str = "INV"
    order_prefix: str = "ORD"
    document_number_retries: int = 3
    delivery_charge_inside: Decimal = Decimal("60")
    delivery_charge_outside: Decimal = Decimal("120")
    currency: str = "BDT"
    log_level: str = "INFO"


def load_settings(
    env: Mapping[str, str] | None = None,
    dotenv_path: Path | None = None,
) -> Settings:
    """Build Settings from *env* (default: the process environment)."""
    if env is None:
        load_dotenv(dotenv_path=dotenv_path)
        env = os.environ

    defaults = Settings()

    backend = env.get("STOREOPS_BACKEND", defaults.backend).strip().lower()
    if backend not in BACKENDS:
        raise ConfigurationError(
            f"STOREOPS_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}"
        )

    isolation_level = (
        env.get("STOREOPS_ISOLATION_LEVEL", defaults.isolation_level).strip().upper()
    )
    if isolation_level not in ISOLATION_LEVELS:
        raise ConfigurationError(
            f"STOREOPS_ISOLATION_LEVEL must be one of {', '.join(ISOLATION_LEVELS)}, "
            f"got {isolation_level!r}"
        )

    log_level = env.get("STOREOPS_LOG_LEVEL", defaults.log_level).strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"STOREOPS_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )

    retries = _int(env, "STOREOPS_DOCUMENT_NUMBER_RETRIES", defaults.document_number_retries)
    if retries < 0:
        raise ConfigurationError("STOREOPS_DOCUMENT_NUMBER_RETRIES cannot be negative")

    return Settings(
        backend=backend,
        database_url=env.get("STOREOPS_DATABASE_URL", defaults.database_url),
        data_file=Path(env.get("STOREOPS_DATA_FILE", str(defaults.data_file))),
        isolation_level=isolation_level,
        atomic_confirmation=_bool(
            env, "STOREOPS_ATOMIC_CONFIRMATION", defaults.atomic_confirmation
        ),
        invoice_prefix=_prefix(env, "STOREOPS_INVOICE_PREFIX", defaults.invoice_prefix),
        order_prefix=_prefix(env, "STOREOPS_ORDER_PREFIX", defaults.order_prefix),
        document_number_retries=retries,
        delivery_charge_inside=_decimal(
            env, "STOREOPS_DELIVERY_CHARGE_INSIDE", defaults.delivery_charge_inside
        ),
        delivery_charge_outside=_decimal(
            env, "STOREOPS_DELIVERY_CHARGE_OUTSIDE", defaults.delivery_charge_outside
        ),
        currency=env.get("STOREOPS_CURRENCY", defaults.currency).strip().upper(),
        log_level=log_level,
    )


# --- Parsing helpers ----------------------------------------------------------


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _decimal(env: Mapping[str, str], name: str, default: Decimal) -> Decimal:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} must be a decimal amount, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative")
    return value


def _prefix(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name, default).strip()
    if not _PREFIX_RE.match(value):
        raise ConfigurationError(f"{name} must be uppercase letters only, got {value!r}")
    return value
