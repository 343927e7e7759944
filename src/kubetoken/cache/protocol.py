from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from kubetoken.domain.token import KubeToken


class ByteStore(Protocol):
    """Whole-resource byte storage. Implementations raise StorageError on I/O failure."""

    def get(self) -> bytes: ...

    def set(self, data: bytes) -> None: ...


class TokenSink(Protocol):
    def set(self, context_name: str, namespace: str, token: KubeToken) -> None: ...
