"""JSON-file-backed implementation of WorkingMemoryStore.

All resources share one file mapping resource id -> document.  Writes go
to a temporary file in the same directory and are moved into place with
``os.replace`` so a crash never leaves a half-written file behind.

Every read and every read-merge-write runs under two locks: a
``threading.Lock`` shared by all store instances in this process, and a
``filelock.FileLock`` on a sibling ``.lock`` file shared with other
processes (CLI runs, workers) using the same file.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog
from filelock import FileLock, Timeout

from shopassist.domain.exceptions import DomainException, StoreUnavailableError
from shopassist.domain.model.resource_state import ResourceState
from shopassist.domain.repository.working_memory_store import WorkingMemoryStore
from shopassist.infrastructure.persistence.working_memory_codec import (
    state_from_document,
    state_to_document,
)

logger = structlog.get_logger()

LOCK_TIMEOUT_SECONDS = 30

# One lock per file, shared by every store instance pointing at it.
_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _file_locks_guard:
        return _file_locks.setdefault(key, threading.Lock())


class JsonWorkingMemoryStore(WorkingMemoryStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._thread_lock = _lock_for(file_path)
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._process_lock = FileLock(
            file_path.with_name(file_path.name + ".lock"), timeout=LOCK_TIMEOUT_SECONDS
        )
        with self._locked():
            self._ensure_file()

    # --- WorkingMemoryStore interface -----------------------------------------

    def load(self, resource_id: str) -> ResourceState:
        document = self.load_document(resource_id)
        try:
            return state_from_document(document)
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise StoreUnavailableError(
                f"Working memory for '{resource_id}' is corrupt: {exc}"
            ) from exc

    def load_document(self, resource_id: str) -> dict[str, Any]:
        with self._locked():
            documents = self._load_raw()
        document = documents.get(resource_id)
        return dict(document) if isinstance(document, dict) else {}

    def commit(self, resource_id: str, state: ResourceState) -> None:
        with self._locked():
            documents = self._load_raw()
            existing = documents.get(resource_id)
            merged = dict(existing) if isinstance(existing, dict) else {}
            merged.update(state_to_document(state))
            documents[resource_id] = merged
            self._persist_raw(documents)
        logger.debug(
            "Working memory committed",
            resource_id=resource_id,
            keys=sorted(merged),
        )

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._thread_lock:
            try:
                with self._process_lock:
                    yield
            except Timeout as exc:
                raise StoreUnavailableError(
                    f"Timed out waiting for the lock on {self._file_path}"
                ) from exc

    def _load_raw(self) -> dict[str, Any]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreUnavailableError(
                f"Cannot read working memory at {self._file_path}: {exc}"
            ) from exc
        if not isinstance(raw, dict):
            raise StoreUnavailableError(
                f"Working memory at {self._file_path} must be a JSON object"
            )
        return raw

    def _persist_raw(self, documents: dict[str, Any]) -> None:
        payload = json.dumps(documents, indent=2) + "\n"
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=".wm-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(payload)
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreUnavailableError(
                f"Cannot write working memory at {self._file_path}: {exc}"
            ) from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.write_text("{}", encoding="utf-8")
