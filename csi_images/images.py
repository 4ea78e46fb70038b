"""Container images needed by each version of the CSI operator addon.

A version is looked up with `get`, which raises a `VersionNotFoundError` for
an unknown version, or with `find`, which returns None instead. The version
labels are meant to come from `versions()` or `LATEST_VERSION`.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import logging
from operator import attrgetter
from types import MappingProxyType

from mashumaro import DataClassDictMixin

from . import csi
from .exceptions import VersionNotFoundError
from .image import Image

__all__ = [
    "LATEST_VERSION",
    "Components",
    "versions",
    "find",
    "get",
    "list_images",
]

_LOGGER = logging.getLogger(__name__)


# Latest version of the addon.
# TODO: Bump to v1.0.3 along with the csi-tencentcloud-cbs v1.2.0 driver.
LATEST_VERSION = "v1.0.2"


@dataclass(frozen=True)
class Components(DataClassDictMixin):
    """The images of all components of one addon version."""

    csi_operator: Image

    def get(self, role: str) -> Image | None:
        """Return the image for the role, or None if the role is unknown.

        The stored image is returned as is, even when it is empty.
        """
        if (getter := ROLES.get(role)) is None:
            return None
        return getter(self)

    def roles(self) -> list[str]:
        """Return the names of all roles."""
        return list(ROLES)

    def images(self) -> list[Image]:
        """Return the images of all roles in role order."""
        return [getter(self) for getter in ROLES.values()]


# Role name to accessor, in the order images are reported.
ROLES: Mapping[str, Callable[[Components], Image]] = MappingProxyType(
    {
        "csi-operator": attrgetter("csi_operator"),
    }
)


_VERSION_MAP: dict[str, Components] = {
    LATEST_VERSION: Components(
        csi_operator=Image(name="csi-operator", tag="v1.0.2"),
    ),
}


def versions() -> list[str]:
    """Return all addon versions in sorted order."""
    return sorted(_VERSION_MAP)


def find(version: str) -> Components | None:
    """Return the components of the addon version, if defined."""
    return _VERSION_MAP.get(version)


def get(version: str) -> Components:
    """Return the components of the addon version.

    Raises a VersionNotFoundError when the version is not defined.
    """
    if (components := find(version)) is None:
        _LOGGER.debug("Unknown addon version %s, known: %s", version, versions())
        raise VersionNotFoundError(version)
    return components


def list_images() -> list[str]:
    """Return every image referenced by any addon version or CSI driver.

    The result may contain duplicates and is intended for reporting.
    """
    items: list[str] = []
    for version in versions():
        items.extend(
            image.base_name()
            for image in _VERSION_MAP[version].images()
            if not image.is_empty()
        )
    items.extend(csi.list_images())
    return items
