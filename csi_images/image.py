"""Helper functions for working with container image references."""

from dataclasses import dataclass
import logging

from mashumaro import DataClassDictMixin

from . import context
from .config import RegistryConfig
from .exceptions import InputException

__all__ = [
    "Image",
    "parse_image",
]

_LOGGER = logging.getLogger(__name__)

TAG_SEPARATOR = ":"
PATH_SEPARATOR = "/"


@dataclass(frozen=True, order=True)
class Image(DataClassDictMixin):
    """A container image identified by a name and a tag.

    An image with an empty name and tag means the image is not needed.
    """

    name: str
    """Repository name of the image, without the registry prefix."""

    tag: str = ""
    """Tag of the image."""

    def is_empty(self) -> bool:
        """Return true when the image does not reference anything."""
        return not self.name and not self.tag

    def base_name(self) -> str:
        """Return the image reference without the registry prefix."""
        if not self.tag:
            return self.name
        return f"{self.name}{TAG_SEPARATOR}{self.tag}"

    def full_name(self, config: RegistryConfig | None = None) -> str:
        """Return the image reference including the registry prefix.

        The active registry configuration is used when none is given.
        """
        if config is None:
            config = context.REGISTRY_CONFIG.get()
        base_name = self.base_name()
        if not (prefix := config.prefix) or not base_name:
            return base_name
        return f"{prefix}{PATH_SEPARATOR}{base_name}"

    def __str__(self) -> str:
        """Return the base name of the image."""
        return self.base_name()


def parse_image(value: str) -> Image:
    """Parse an image reference of the form `name:tag`.

    A colon that appears before the last path separator is part of a registry
    host (e.g. `localhost:5000/csi-attacher`) and not a tag separator.
    """
    if not (value := value.strip()):
        raise InputException("Invalid image reference: empty string")
    name, sep, tag = value.rpartition(TAG_SEPARATOR)
    if not sep or PATH_SEPARATOR in tag:
        name, tag = value, ""
    if not name:
        raise InputException(f"Invalid image reference missing name: '{value}'")
    _LOGGER.debug("Parsed image reference %s (name=%s, tag=%s)", value, name, tag)
    return Image(name=name, tag=tag)
