from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, cast

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from kubetoken.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...

    def get(self, key: str, default: object = None) -> object: ...


DEFAULT_CONFIG_PATH = "~/.config/kubetoken/config.yaml"

_DEFAULTS: dict[str, object] = {
    "cache": {
        "path": "~/.config/kubetoken/kubetoken.json",
    },
    "http": {
        "timeout": 30.0,
    },
    "current_context": "",
    "contexts": [],
}


@dataclass(frozen=True)
class Settings:
    cache_path: Path
    timeout: float | None


@dataclass(frozen=True)
class ContextConfig:
    name: str
    url: str
    token: str = ""
    namespace: str = ""
    ca_cert: Path | None = None
    insecure_skip_tls_verify: bool = False


def create_config(
    yaml_path: str = DEFAULT_CONFIG_PATH,
    env_prefix: str = "KUBETOKEN",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file. A missing file is ignored.
        env_prefix: Prefix for environment variables, e.g. ``KUBETOKEN__CACHE__PATH``.
        defaults: Default configuration values.
        overrides: Values that win over every other layer.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(str(Path(yaml_path).expanduser()), read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def load_settings(cfg: AppConfig | None = None) -> Settings:
    if cfg is None:
        cfg = create_config()
    cache_path = Path(str(cfg["cache.path"])).expanduser()
    raw_timeout = cfg["http.timeout"]
    try:
        timeout = float(str(raw_timeout)) if raw_timeout not in (None, "") else 0.0
    except ValueError as exc:
        raise ConfigurationError(f"http.timeout must be a number, got {raw_timeout!r}") from exc
    return Settings(cache_path=cache_path, timeout=timeout or None)


def load_context(cfg: AppConfig, name: str = "") -> ContextConfig:
    """Resolve a named context, falling back to ``current_context``.

    A context name that is itself an http(s) URL and has no config entry is
    used as its own base URL.
    """
    if not name:
        name = str(cfg.get("current_context", "") or "")
    if not name:
        raise ConfigurationError("no context selected; pass --context or set current_context")

    contexts = cast("Iterable[Mapping[str, object]]", cfg.get("contexts", []) or [])
    raw = next((c for c in contexts if c.get("name") == name), None)
    if raw is None:
        if name.startswith(("https://", "http://")):
            return ContextConfig(name=name, url=name)
        raise ConfigurationError(f"context '{name}' not found in configuration")

    url = str(raw.get("url", "") or "")
    if not url:
        raise ConfigurationError(f"context '{name}': missing required field 'url'")
    ca_cert = raw.get("ca_cert")
    return ContextConfig(
        name=name,
        url=url,
        token=str(raw.get("token", "") or ""),
        namespace=str(raw.get("namespace", "") or ""),
        ca_cert=Path(str(ca_cert)).expanduser() if ca_cert else None,
        insecure_skip_tls_verify=_as_bool(raw.get("insecure_skip_tls_verify", False)),
    )


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
