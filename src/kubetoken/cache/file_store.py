from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from kubetoken.cache.serialization import EMPTY_STORE
from kubetoken.exceptions import StorageError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_FILE_MODE = 0o600


class FileByteStore:
    """Whole-file byte storage, created as an empty cache on first read."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> bytes:
        try:
            return self._path.read_bytes()
        except FileNotFoundError:
            logger.debug("Creating empty token cache at %s", self._path)
            self.set(EMPTY_STORE)
            return EMPTY_STORE
        except OSError as exc:
            raise StorageError(self._path, "error reading file") from exc

    def set(self, data: bytes) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as exc:
            raise StorageError(self._path, "error writing file") from exc
