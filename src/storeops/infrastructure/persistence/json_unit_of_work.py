"""JSON-file-backed unit of work.

The whole store is one JSON document. A transaction loads it into memory,
the repositories change that copy, and commit writes it to a temporary
file that atomically replaces the original. Rolling back just drops the
copy. Transactions on the same file are serialised by a process-wide
lock; other processes writing the same file are not coordinated.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from storeops.domain.exceptions import PersistenceError
from storeops.domain.repository.unit_of_work import UnitOfWork
from storeops.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storeops.infrastructure.persistence.json_sale_repository import JsonSaleRepository

logger = logging.getLogger(__name__)

_EMPTY_DOCUMENT = {"products": [], "sales": [], "next_sale_id": 1}

_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _file_locks_guard:
        return _file_locks.setdefault(path, threading.Lock())


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._document: dict | None = None
        self._ensure_file()

    def _begin(self) -> None:
        if self._document is not None:
            raise PersistenceError("A transaction is already open on this unit of work")
        self._lock.acquire()
        try:
            self._document = self._load()
        except BaseException:
            self._lock.release()
            raise
        self.products = JsonProductRepository(self._document["products"])
        self.sales = JsonSaleRepository(self._document)

    def _commit(self) -> None:
        try:
            self._persist(self._document)
        finally:
            self._document = None
            self._lock.release()

    def _rollback(self) -> None:
        self._document = None
        self._lock.release()
        logger.debug("Transaction on %s rolled back", self._file_path)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict:
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read store {self._file_path}: {exc}") from exc
        for key, default in _EMPTY_DOCUMENT.items():
            document.setdefault(key, [] if isinstance(default, list) else default)
        return document

    def _persist(self, document: dict | None) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            tmp_path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self._file_path)
        except OSError as exc:
            logger.error("Failed to write store %s: %s", self._file_path, exc)
            raise PersistenceError(f"Cannot write store {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(_EMPTY_DOCUMENT, indent=2) + "\n", encoding="utf-8"
            )
