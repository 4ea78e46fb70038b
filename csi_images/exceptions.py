"""Exceptions related to csi-images."""

__all__ = [
    "CatalogException",
    "InputException",
    "ObjectNotFoundError",
    "VersionNotFoundError",
    "DriverNotFoundError",
]


class CatalogException(Exception):
    """Generic base exception used for this library."""


class InputException(CatalogException):
    """Raised when an image reference is not formatted as expected."""


class ObjectNotFoundError(CatalogException):
    """Raised when an entry is not found in a catalog."""


class VersionNotFoundError(ObjectNotFoundError):
    """Raised when no component definition exists for an addon version."""

    def __init__(self, version: str) -> None:
        super().__init__(
            f"the component version definition corresponding to version {version} could not be found"
        )
        self.version = version


class DriverNotFoundError(ObjectNotFoundError):
    """Raised when a CSI driver has no images for a protocol version."""

    def __init__(self, driver: str, csi_version: str | None = None) -> None:
        if csi_version is None:
            message = f"CSI driver '{driver}' is not defined"
        else:
            message = (
                f"CSI driver '{driver}' has no images for CSI version '{csi_version}'"
            )
        super().__init__(message)
        self.driver = driver
        self.csi_version = csi_version
