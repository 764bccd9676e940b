"""
JSON File Storage Implementation

DESIGN DECISION: Each collection is one JSON file in a data directory:

    ~/.family_budget/transactions.json
    ~/.family_budget/goals.json
    ~/.family_budget/theme.json

WHY:
1. Users can open, diff and back up their data with ordinary tools
2. No database setup required
3. One file per collection, named after its storage key

TRADEOFFS:
- Whole-collection rewrites (fine for a personal ledger)
- No cross-file transactions (collections are independent anyway)

Writes go to a temp file first and are moved into place with os.replace,
so a crash mid-write never leaves a half-written collection behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from family_budget.config import StorageSettings, get_settings
from family_budget.exceptions import CorruptDataError, PersistenceError
from family_budget.services.storage.interface import CollectionStorageInterface


logger = structlog.get_logger(__name__)


class JsonFileStorage(CollectionStorageInterface):
    """
    File-per-key JSON storage.

    Keys must be simple names; they become file names.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        settings: Optional[StorageSettings] = None,
    ):
        self._settings = settings or get_settings().storage
        self._data_dir = Path(data_dir or self._settings.data_dir)
        self._retrying = Retrying(
            stop=stop_after_attempt(self._settings.write_attempts),
            wait=wait_exponential(
                multiplier=self._settings.retry_wait_seconds,
                max=self._settings.retry_wait_seconds * 10,
            ),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File path backing a key."""
        if not key or not key.replace("_", "").isalnum():
            raise ValueError(f"Invalid collection key: {key!r}")
        return self._data_dir / f"{key}.json"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def load(self, key: str) -> Optional[Any]:
        """Read and decode <key>.json, None if the file does not exist."""
        path = self.path_for(key)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"{path} is not valid JSON: {e}") from e

    def save(self, key: str, value: Any) -> None:
        """Encode and atomically replace <key>.json."""
        path = self.path_for(key)
        try:
            text = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot serialize {key}: {e}") from e

        try:
            self._retrying(self._write_atomic, path, text)
        except OSError as e:
            logger.error("storage_write_failed", key=key, path=str(path), error=str(e))
            raise PersistenceError(f"Failed to write {path}: {e}") from e

        logger.debug("storage_write", key=key, path=str(path), size=len(text))

    def _write_atomic(self, path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            try:
                fh = os.fdopen(fd, "w", encoding="utf-8")
            except BaseException:
                # fdopen did not take ownership of the descriptor
                os.close(fd)
                raise
            with fh:
                fh.write(text)
                fh.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
