"""
sharecount/core/store.py
═══════════════════════════════════════════════════════════════════════════
Key/value storage for cached share counts.
  • get(key) → bytes, or None if the key was never set or is unreadable
  • set(key, value) → True on success, False if the write failed
  • Writes replace the whole value, never partial
  • MemoryStore: process-local dict guarded by a threading lock
  • FileStore:   one file per key, written via temp file + os.replace
═══════════════════════════════════════════════════════════════════════════
"""

import contextlib
import hashlib
import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Optional, Protocol

log = logging.getLogger("store")


class Store(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...
    def set(self, key: str, value: bytes) -> bool: ...
    def summary(self) -> dict: ...


class MemoryStore:
    def __init__(self) -> None:
        self._data: dict[str, dict] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: bytes) -> bool:
        with self._lock:
            self._data[key] = {"value": bytes(value), "ts": time.time()}
        return True

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            e = self._data.get(key)
            return e["value"] if e else None

    def summary(self) -> dict:
        """Metadata only — safe to expose in /health."""
        with self._lock:
            return {k: {"age_s": round(time.time() - v["ts"], 1)} for k, v in self._data.items()}


class FileStore:
    def __init__(self, root) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        # keys contain ':' and user-supplied ids, so the filename is a digest
        return self.root / f"{hashlib.sha1(key.encode('utf-8')).hexdigest()}.json"

    def set(self, key: str, value: bytes) -> bool:
        path = self._path(key)
        tmp  = None
        try:
            fd, tmp = tempfile.mkstemp(dir=self.root, suffix=".tmp")
            with os.fdopen(fd, "wb") as fh:
                fh.write(value)
            os.replace(tmp, path)
        except OSError as ex:
            log.error(f"Write failed for {key}: {ex}")
            if tmp is not None:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp)
            return False
        return True

    def get(self, key: str) -> Optional[bytes]:
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None
        except OSError as ex:
            log.error(f"Read failed for {key}: {ex}")
            return None

    def summary(self) -> dict:
        now = time.time()
        return {
            p.stem: {"age_s": round(now - p.stat().st_mtime, 1)}
            for p in self.root.glob("*.json")
        }


def make_store(store_dir: Optional[str]) -> Store:
    if store_dir:
        log.info(f"Using file store at {store_dir}")
        return FileStore(store_dir)
    return MemoryStore()
