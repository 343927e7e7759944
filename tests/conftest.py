"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep KUBETOKEN__ env vars from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("KUBETOKEN__"):
            monkeypatch.delenv(key)
