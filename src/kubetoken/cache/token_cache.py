from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from kubetoken.cache.serialization import EMPTY_STORE, decode_entries, encode_entries, encode_token
from kubetoken.domain.token import CacheEntry, CacheKey

if TYPE_CHECKING:
    from collections.abc import Callable

    from kubetoken.cache.protocol import ByteStore
    from kubetoken.domain.token import KubeToken

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class KubeTokenCache:
    """Tokens keyed by (context, namespace), persisted through a ByteStore.

    Nothing is held in memory between calls: every operation re-reads the
    store, and writes serialize the whole entry list back.
    """

    def __init__(self, store: ByteStore, clock: Callable[[], datetime] = _utc_now) -> None:
        self._store = store
        self._clock = clock

    def get(self, context_name: str, namespace: str) -> str | None:
        """Return the cached token as JSON, or None when missing or expired."""
        key = CacheKey(context_name, namespace)
        entry = next((e for e in self._read() if e.key == key), None)
        if entry is None:
            logger.debug("No cached token for context=%s namespace=%s", context_name, namespace)
            return None
        if not entry.token.is_valid_at(self._clock()):
            logger.debug(
                "Cached token for context=%s namespace=%s expired at %s",
                context_name,
                namespace,
                entry.token.expiration_timestamp.isoformat(),
            )
            return None
        logger.debug("Using cached token for context=%s namespace=%s", context_name, namespace)
        return encode_token(entry.token)

    def put(self, context_name: str, namespace: str, token: KubeToken) -> None:
        """Insert or replace the token for a key, keeping the entry's position.

        Duplicate entries for the key (from a hand-edited file) collapse into
        the first one.
        """
        key = CacheKey(context_name, namespace)
        replacement = CacheEntry(key=key, token=token)
        entries: list[CacheEntry] = []
        replaced = False
        for entry in self._read():
            if entry.key != key:
                entries.append(entry)
            elif not replaced:
                entries.append(replacement)
                replaced = True
        if not replaced:
            entries.append(replacement)
        self._store.set(encode_entries(entries))
        logger.debug("Cached token for context=%s namespace=%s", context_name, namespace)

    def set(self, context_name: str, namespace: str, token: KubeToken) -> None:
        """Best-effort ``put``: any failure is logged, never raised."""
        try:
            self.put(context_name, namespace, token)
        except Exception as exc:
            logger.warning("Could not cache token for context=%s namespace=%s: %s", context_name, namespace, exc)

    def entries(self) -> list[CacheEntry]:
        return self._read()

    def invalidate(self, context_name: str, namespace: str | None = None) -> int:
        """Remove one key, or every namespace of a context. Returns how many were removed."""
        entries = self._read()
        kept = [
            e
            for e in entries
            if not (e.key.context_name == context_name and (namespace is None or e.key.namespace == namespace))
        ]
        removed = len(entries) - len(kept)
        if removed:
            self._store.set(encode_entries(kept))
        return removed

    def clear(self) -> None:
        self._store.set(EMPTY_STORE)

    def _read(self) -> list[CacheEntry]:
        return decode_entries(self._store.get())
