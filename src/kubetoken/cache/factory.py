from __future__ import annotations

from typing import TYPE_CHECKING

from kubetoken.cache.file_store import FileByteStore
from kubetoken.cache.token_cache import KubeTokenCache
from kubetoken.config import load_settings

if TYPE_CHECKING:
    from kubetoken.config import AppConfig


def create_token_cache(config: AppConfig | None = None) -> KubeTokenCache:
    """Build a file-backed KubeTokenCache from the app config's ``cache.path``."""
    settings = load_settings(config)
    return KubeTokenCache(FileByteStore(settings.cache_path))
