"""Small persistent JSON store for state that must survive restarts.

`JsonStateStore` keeps one JSON document per name under a state directory
(``var/`` by default). Writes go through a temp file and ``os.replace`` so
readers never see a half-written document; a lockfile serialises writers
across processes.
"""
from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict

logger = logging.getLogger(__name__)


class FileLock:
    """Simple file-lock using a lockfile (cross-platform, advisory).

    Note: This is a lightweight lock suitable for single-writer or low-contention
    scenarios. It uses atomic creation of a .lock file and retries until timeout.
    """

    def __init__(self, lock_path: str, timeout: float = 5.0, retry: float = 0.05) -> None:
        self.lock_path = lock_path
        self.timeout = float(timeout)
        self.retry = float(retry)
        self._acquired = False

    def acquire(self) -> bool:
        start = time.time()
        while True:
            try:
                # O_EXCL ensures atomic creation; failing if exists
                fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                os.close(fd)
                self._acquired = True
                return True
            except FileExistsError:
                if (time.time() - start) >= self.timeout:
                    return False
                time.sleep(self.retry)

    def release(self) -> None:
        try:
            if self._acquired and os.path.exists(self.lock_path):
                os.unlink(self.lock_path)
        finally:
            self._acquired = False

    def __enter__(self):
        ok = self.acquire()
        if not ok:
            raise TimeoutError(f"Failed to acquire file lock: {self.lock_path}")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()


class JsonStateStore:
    """Named JSON document in *directory*.

    Load and save failures are logged and swallowed: losing persisted
    bookmarks must never take the application down.
    """

    def __init__(self, name: str, directory: str = "var") -> None:
        self.name = name if name.endswith(".json") else f"{name}.json"
        self.directory = directory
        os.makedirs(self.directory, exist_ok=True)

    @property
    def path(self) -> str:
        return os.path.join(self.directory, self.name)

    def load(self) -> Dict[str, Any]:
        path = self.path
        lock = path + ".lock"
        try:
            if not os.path.exists(path):
                return {}
            with FileLock(lock):
                with open(path, "r", encoding="utf-8") as fh:
                    data = json.load(fh) or {}
            if not isinstance(data, dict):
                logger.warning("JSON store %s does not hold an object; ignoring", self.name)
                return {}
            return data
        except Exception as e:
            logger.warning("Failed to load JSON store %s: %s", self.name, e)
            return {}

    def save(self, data: Dict[str, Any]) -> None:
        path = self.path
        lock = path + ".lock"
        try:
            with FileLock(lock):
                tmp = path + ".tmp"
                with open(tmp, "w", encoding="utf-8") as fh:
                    json.dump(data, fh)
                os.replace(tmp, path)
        except Exception as e:
            logger.warning("Failed to save JSON store %s: %s", self.name, e)

    def clear(self) -> None:
        try:
            os.unlink(self.path)
        except FileNotFoundError:
            pass
