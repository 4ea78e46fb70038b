"""Utilities for tracking the active registry configuration."""

import contextvars
from contextlib import contextmanager
import logging
from typing import Generator

from .config import RegistryConfig

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "REGISTRY_CONFIG",
    "registry_config",
]


REGISTRY_CONFIG: contextvars.ContextVar[RegistryConfig] = contextvars.ContextVar(
    "registry_config", default=RegistryConfig()
)


@contextmanager
def registry_config(config: RegistryConfig) -> Generator[RegistryConfig, None, None]:
    """Use the registry configuration for the duration of the block."""
    previous = REGISTRY_CONFIG.get()
    token = REGISTRY_CONFIG.set(config)
    _LOGGER.debug("Registry prefix '%s' > '%s'", previous.prefix, config.prefix)
    try:
        yield config
    finally:
        REGISTRY_CONFIG.reset(token)
        _LOGGER.debug("Registry prefix '%s' < '%s'", previous.prefix, config.prefix)
