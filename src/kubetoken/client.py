from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from kubetoken.domain.token import KubeToken
from kubetoken.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    ResponseReadError,
    UnexpectedStatusError,
)

if TYPE_CHECKING:
    from kubetoken.cache.protocol import TokenSink
    from kubetoken.session import SessionFactory

logger = logging.getLogger(__name__)

KUBETOKEN_PATH = "auth/kubetoken"


class KubeTokenClient:
    """Fetches a namespace-scoped Kubernetes token for a context.

    Successful fetches are written to *cache* on a best-effort basis; a
    failed cache write never fails the fetch.
    """

    def __init__(
        self,
        context_name: str,
        token: str,
        namespace: str,
        cache: TokenSink,
        *,
        session_factory: SessionFactory | None = None,
    ) -> None:
        if not context_name:
            raise ConfigurationError("no context selected; a context name is required to request a token")
        if session_factory is None:
            from kubetoken.config import create_config
            from kubetoken.session import ConfigSessionFactory

            session_factory = ConfigSessionFactory(create_config())

        self._http_client, self._url = session_factory(context_name, token, f"{KUBETOKEN_PATH}/{namespace}")
        self._context_name = context_name
        self._namespace = namespace
        self._cache = cache

    @property
    def url(self) -> str:
        return self._url

    def get_kube_token(self) -> str:
        """Request a fresh token and return the response body unchanged."""
        logger.debug("Requesting kubetoken from %s", self._url)
        try:
            with self._http_client.stream("GET", self._url) as response:
                logger.debug("kubetoken request to %s returned %s", self._url, response.status_code)
                if response.status_code == httpx.codes.UNAUTHORIZED:
                    raise AuthenticationError(self._context_name)
                if response.status_code != httpx.codes.OK:
                    raise UnexpectedStatusError(f"{response.status_code} {response.reason_phrase}".strip())
                try:
                    response.read()
                except httpx.HTTPError as exc:
                    raise ResponseReadError(f"failed to read kubetoken response: {exc}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(self._url, exc) from exc

        try:
            token = KubeToken.from_json(response.content)
        except DecodeError as exc:
            raise DecodeError(f"failed to decode kubetoken response: {exc}") from exc

        logger.debug(
            "Received kubetoken for context=%s namespace=%s expiring at %s",
            self._context_name,
            self._namespace,
            token.expiration_timestamp.isoformat(),
        )
        self._cache.set(self._context_name, self._namespace, token)
        return response.text

    def close(self) -> None:
        self._http_client.close()
