"""JSON layout of the token cache file.

The file holds a tab-indented JSON array of entries:

    [
    	{
    		"context": "https://cloud.example.com",
    		"namespace": "dev",
    		"token": {...}
    	}
    ]
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from kubetoken.domain.token import CacheEntry, CacheKey, KubeToken
from kubetoken.exceptions import DecodeError, EncodeError

if TYPE_CHECKING:
    from collections.abc import Sequence

EMPTY_STORE = b"[]"
_INDENT = "\t"


def encode_token(token: KubeToken) -> str:
    """Pretty-print a token the same way it is laid out in the cache file."""
    return json.dumps(token.payload, indent=_INDENT)


def encode_entries(entries: Sequence[CacheEntry]) -> bytes:
    try:
        return json.dumps([_entry_to_dict(entry) for entry in entries], indent=_INDENT).encode()
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"token cache entries are not JSON serializable: {exc}") from exc


def decode_entries(data: bytes) -> list[CacheEntry]:
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"token cache is not valid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise DecodeError("token cache must be a JSON array")
    return [_entry_from_dict(item, index) for index, item in enumerate(raw)]


def _entry_to_dict(entry: CacheEntry) -> dict[str, Any]:
    return {
        "context": entry.key.context_name,
        "namespace": entry.key.namespace,
        "token": entry.token.payload,
    }


def _entry_from_dict(item: object, index: int) -> CacheEntry:
    if not isinstance(item, dict):
        raise DecodeError(f"token cache entry {index} is not an object")
    context_name = item.get("context")
    namespace = item.get("namespace")
    if not isinstance(context_name, str) or not isinstance(namespace, str):
        raise DecodeError(f"token cache entry {index} needs string 'context' and 'namespace' fields")
    try:
        token = KubeToken.from_payload(item.get("token"))
    except DecodeError as exc:
        raise DecodeError(f"token cache entry {index}: {exc}") from exc
    return CacheEntry(key=CacheKey(context_name, namespace), token=token)
