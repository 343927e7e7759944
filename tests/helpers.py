from datetime import UTC, datetime, timedelta
from typing import Any

NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=UTC)


def token_payload(expires_at: datetime, *, token: str = "eyJhbGciOi.token", **extra: Any) -> dict[str, Any]:
    """A TokenRequest payload as returned by the kubetoken endpoint."""
    return {
        "kind": "TokenRequest",
        "apiVersion": "authentication.k8s.io/v1",
        "metadata": {"creationTimestamp": None},
        "spec": {"audiences": None, "expirationSeconds": None, "boundObjectRef": None},
        "status": {
            "token": token,
            "expirationTimestamp": expires_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
        },
        **extra,
    }


def expiring_in(delta: timedelta, **kwargs: Any) -> dict[str, Any]:
    return token_payload(NOW + delta, **kwargs)
