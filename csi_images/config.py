"""Configuration objects for csi-images."""

from collections.abc import Mapping
from dataclasses import dataclass
import os

REGISTRY_DOMAIN_ENV = "CSI_IMAGES_REGISTRY_DOMAIN"
REGISTRY_NAMESPACE_ENV = "CSI_IMAGES_REGISTRY_NAMESPACE"


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for the registry that images are published to."""

    domain: str = ""
    """Registry host, e.g. `registry.example.com`."""

    namespace: str = ""
    """Repository namespace within the registry, e.g. `library`."""

    @property
    def prefix(self) -> str:
        """Return the path prepended to an image base name."""
        return "/".join(part.strip("/") for part in (self.domain, self.namespace) if part)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RegistryConfig":
        """Build a configuration from environment variables."""
        if environ is None:
            environ = os.environ
        return cls(
            domain=environ.get(REGISTRY_DOMAIN_ENV, ""),
            namespace=environ.get(REGISTRY_NAMESPACE_ENV, ""),
        )
