import logging
import sys

_THIRD_PARTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr; stdout carries only the token for kubectl."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("kubetoken %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)

    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)
