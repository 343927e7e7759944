from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from kubetoken.exceptions import DecodeError

_RFC3339 = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})")


def parse_timestamp(raw: object) -> datetime:
    """Parse an RFC 3339 timestamp such as ``2026-10-18T12:00:00Z``.

    A time part and a UTC offset are required.
    """
    if not isinstance(raw, str) or not raw:
        raise DecodeError(f"expirationTimestamp must be a non-empty string, got {raw!r}")
    if _RFC3339.fullmatch(raw) is None:
        raise DecodeError(f"invalid expirationTimestamp {raw!r}")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise DecodeError(f"invalid expirationTimestamp {raw!r}") from exc


@dataclass(frozen=True)
class KubeToken:
    """A Kubernetes TokenRequest payload.

    Only ``status.expirationTimestamp`` is interpreted; the rest of the
    payload is carried as-is so it serializes back unchanged.
    """

    payload: dict[str, Any]
    expiration_timestamp: datetime

    @classmethod
    def from_payload(cls, payload: object) -> KubeToken:
        if not isinstance(payload, dict):
            raise DecodeError(f"token must be a JSON object, got {type(payload).__name__}")
        status = payload.get("status")
        if not isinstance(status, dict):
            raise DecodeError("token has no status section")
        return cls(payload=payload, expiration_timestamp=parse_timestamp(status.get("expirationTimestamp")))

    @classmethod
    def from_json(cls, data: str | bytes) -> KubeToken:
        try:
            payload = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DecodeError(f"token is not valid JSON: {exc}") from exc
        return cls.from_payload(payload)

    def is_valid_at(self, now: datetime) -> bool:
        return self.expiration_timestamp > now


@dataclass(frozen=True)
class CacheKey:
    context_name: str
    namespace: str


@dataclass(frozen=True)
class CacheEntry:
    key: CacheKey
    token: KubeToken
