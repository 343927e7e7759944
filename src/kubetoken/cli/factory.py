from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from kubetoken.cache.factory import create_token_cache
from kubetoken.cache.token_cache import KubeTokenCache
from kubetoken.client import KubeTokenClient
from kubetoken.config import DEFAULT_CONFIG_PATH, create_config, load_context, load_settings
from kubetoken.exceptions import ConfigurationError
from kubetoken.session import ConfigSessionFactory


@dataclass(frozen=True)
class TokenContext:
    context_name: str
    namespace: str
    cache: KubeTokenCache
    client: KubeTokenClient


@contextmanager
def build_token_context(
    context_name: str | None = None,
    namespace: str | None = None,
    token: str | None = None,
    config_path: str = DEFAULT_CONFIG_PATH,
) -> Iterator[TokenContext]:
    """Composition root: resolves the context, wires cache and client, closes the client on exit."""
    cfg = create_config(config_path)
    settings = load_settings(cfg)
    context = load_context(cfg, context_name or "")
    namespace = namespace or context.namespace
    if not namespace:
        raise ConfigurationError(f"no namespace given and context '{context.name}' has no default namespace")

    cache = create_token_cache(cfg)
    client = KubeTokenClient(
        context.name,
        token or context.token,
        namespace,
        cache,
        session_factory=ConfigSessionFactory(cfg, timeout=settings.timeout),
    )
    try:
        yield TokenContext(context_name=context.name, namespace=namespace, cache=cache, client=client)
    finally:
        client.close()

