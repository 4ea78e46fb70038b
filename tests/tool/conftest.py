"""Fixtures for csi-images tool tests."""

import pytest

from csi_images.config import REGISTRY_DOMAIN_ENV, REGISTRY_NAMESPACE_ENV


@pytest.fixture(autouse=True)
def clear_registry_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore any registry configuration from the environment."""
    monkeypatch.delenv(REGISTRY_DOMAIN_ENV, raising=False)
    monkeypatch.delenv(REGISTRY_NAMESPACE_ENV, raising=False)
