from __future__ import annotations

import logging
import ssl
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

import httpx

from kubetoken.config import load_context

if TYPE_CHECKING:
    from kubetoken.config import AppConfig, ContextConfig

logger = logging.getLogger(__name__)

SessionFactory: TypeAlias = Callable[[str, str, str], tuple[httpx.Client, str]]


def join_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def create_session(
    context: ContextConfig,
    token: str,
    path: str,
    *,
    timeout: float | None = None,
) -> tuple[httpx.Client, str]:
    """Build a bearer-authenticated client for *context* and the URL of *path* on it."""
    verify: bool | ssl.SSLContext = True
    if context.insecure_skip_tls_verify:
        logger.warning("TLS verification disabled for context %s", context.name)
        verify = False
    elif context.ca_cert is not None:
        verify = ssl.create_default_context(cafile=str(context.ca_cert))

    client = httpx.Client(
        headers={"Authorization": f"Bearer {token}"},
        timeout=httpx.Timeout(timeout),
        verify=verify,
        follow_redirects=True,
    )
    return client, join_url(context.url, path)


class ConfigSessionFactory:
    """Session factory resolving base URLs from the configured contexts."""

    def __init__(self, cfg: AppConfig, *, timeout: float | None = None) -> None:
        self._cfg = cfg
        self._timeout = timeout

    def __call__(self, context_name: str, token: str, path: str) -> tuple[httpx.Client, str]:
        context = load_context(self._cfg, context_name)
        return create_session(context, token, path, timeout=self._timeout)
