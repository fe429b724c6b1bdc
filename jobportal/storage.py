"""String key-value stores that keep the login session across reloads."""
from __future__ import annotations

import fcntl
import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

from jobportal.log import get_logger

log = get_logger(__name__)


@contextmanager
def _locked(lock_path: Path):
    """Exclusive advisory lock (Unix fcntl) on a sidecar lock file."""
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    with open(lock_path, "a+") as f:
        try:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        except (OSError, AttributeError):
            pass
        try:
            yield
        finally:
            try:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            except (OSError, AttributeError):
                pass


class MemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStore:
    """JSON object on disk.

    Writers hold a lock on `<file>.lock` for the read-modify-write and swap
    the new content in with os.replace, so readers never see a partial file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock_path = self.path.with_name(self.path.name + ".lock")

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            log.warning("Corrupt store %s, treating as empty", self.path.name)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with _locked(self._lock_path):
            data = self._read()
            data[key] = str(value)
            self._write(data)

    def remove(self, key: str) -> None:
        with _locked(self._lock_path):
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


class NamespacedKeyValueStore:
    """Prefixes every key with a client id so browsers sharing a file stay apart."""

    def __init__(self, inner, namespace: str) -> None:
        self._inner = inner
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> str | None:
        return self._inner.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self._inner.set(self._key(key), value)

    def remove(self, key: str) -> None:
        self._inner.remove(self._key(key))
