class KubetokenException(Exception):
    """Base class for every error raised by kubetoken."""


class ConfigurationError(KubetokenException):
    """Raised when a context or setting is missing or invalid."""


class StorageError(KubetokenException):
    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class DecodeError(KubetokenException):
    """Raised when persisted or remote token JSON cannot be decoded."""


class NetworkError(KubetokenException):
    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        super().__init__(f"failed GET request to {url}: {cause}")


class AuthenticationError(KubetokenException):
    def __init__(self, context_name: str) -> None:
        self.context_name = context_name
        super().__init__(f"not logged in to context '{context_name}'; log in again and retry")


class UnexpectedStatusError(KubetokenException):
    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"GET request returned status {status}")


class ResponseReadError(KubetokenException):
    """Raised when a successful response body cannot be read."""


class EncodeError(KubetokenException):
    """Raised when a token payload cannot be serialized to JSON."""
