"""Sidecar images needed by each CSI storage driver.

The table is keyed by the driver type and then by the CSI protocol version
since the set of sidecar containers differs between both. It must be kept
the same as the images deployed by the csi-operator, see
https://github.com/tkestack/csi-operator/blob/74188bd0f7462446109ee82f7488d8bd3646f525/pkg/controller/csi/enhancer/enhancer.go#L64
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import logging
from operator import attrgetter
from types import MappingProxyType

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig

from .exceptions import DriverNotFoundError

__all__ = [
    "CSI_VERSION_V0",
    "CSI_VERSION_V1",
    "CSI_VERSION_V1P1",
    "CSI_DRIVER_CEPH_RBD",
    "CSI_DRIVER_CEPH_FS",
    "CSI_DRIVER_TENCENT_CBS",
    "CSIVersion",
    "drivers",
    "csi_versions",
    "find",
    "get",
    "get_images",
    "list_images",
]

_LOGGER = logging.getLogger(__name__)


# The 0.3.0 version of CSI.
CSI_VERSION_V0 = "v0.0"
# The 1.x version of CSI.
CSI_VERSION_V1 = "v1.0"
# The 1.1+ version of CSI on tencent cloud cvm, which does not need a
# secret id and key.
CSI_VERSION_V1P1 = "v1.1"

CSI_DRIVER_CEPH_RBD = "csi-rbd"
CSI_DRIVER_CEPH_FS = "csi-cephfs"
CSI_DRIVER_TENCENT_CBS = "com.tencent.cloud.csi.cbs"


@dataclass(frozen=True)
class CSIVersion(DataClassDictMixin):
    """The images of all CSI components for one driver and protocol version.

    An empty string means the component is not required.
    """

    provisioner: str = ""
    attacher: str = ""
    resizer: str = ""
    snapshotter: str = ""
    liveness_probe: str = ""
    node_registrar: str = ""
    cluster_registrar: str = ""
    driver: str = ""

    def get(self, role: str) -> str | None:
        """Return the image for the role, or None if the role is unknown.

        A known role that is not required returns an empty string.
        """
        if (getter := ROLES.get(role)) is None:
            return None
        return getter(self)

    class Config(BaseConfig):
        omit_default = True


# Role name to accessor, in the order images are reported.
ROLES: Mapping[str, Callable[[CSIVersion], str]] = MappingProxyType(
    {
        "attacher": attrgetter("attacher"),
        "provisioner": attrgetter("provisioner"),
        "snapshotter": attrgetter("snapshotter"),
        "resizer": attrgetter("resizer"),
        "liveness-probe": attrgetter("liveness_probe"),
        "node-registrar": attrgetter("node_registrar"),
        "cluster-registrar": attrgetter("cluster_registrar"),
        "driver": attrgetter("driver"),
    }
)


_CSI_VERSION_MAP: dict[str, dict[str, CSIVersion]] = {
    CSI_DRIVER_CEPH_RBD: {
        CSI_VERSION_V0: CSIVersion(
            provisioner="csi-provisioner:v0.4.2",
            attacher="csi-attacher:v0.4.2",
            snapshotter="csi-snapshotter:v0.4.1",
            liveness_probe="livenessprobe:v0.4.1",
            node_registrar="driver-registrar:v0.3.0",
            driver="rbdplugin:v0.3.0",
        ),
        CSI_VERSION_V1: CSIVersion(
            provisioner="csi-provisioner:v1.0.1",
            attacher="csi-attacher:v1.1.0",
            snapshotter="csi-snapshotter:v1.1.0",
            liveness_probe="livenessprobe:v1.1.0",
            node_registrar="csi-node-driver-registrar:v1.1.0",
            driver="rbdplugin:v1.0.0",
            # TODO: Add the csi-resizer:v0.1.0 sidecar once the operator deploys it.
        ),
    },
    CSI_DRIVER_CEPH_FS: {
        CSI_VERSION_V0: CSIVersion(
            provisioner="csi-provisioner:v0.4.2",
            attacher="csi-attacher:v0.4.2",
            liveness_probe="livenessprobe:v0.4.1",
            node_registrar="driver-registrar:v0.3.0",
            driver="cephfsplugin:v0.3.0",
        ),
        CSI_VERSION_V1: CSIVersion(
            provisioner="csi-provisioner:v1.0.1",
            attacher="csi-attacher:v1.1.0",
            liveness_probe="livenessprobe:v1.1.0",
            node_registrar="csi-node-driver-registrar:v1.1.0",
            driver="cephfsplugin:v1.0.0",
        ),
    },
    CSI_DRIVER_TENCENT_CBS: {
        CSI_VERSION_V0: CSIVersion(
            provisioner="csi-provisioner:v0.4.2",
            attacher="csi-attacher:v0.4.2",
            node_registrar="driver-registrar:v0.3.0",
            driver="csi-tencentcloud-cbs:v0.2.1",
        ),
        CSI_VERSION_V1: CSIVersion(
            provisioner="csi-provisioner:v1.2.0",
            attacher="csi-attacher:v1.1.0",
            snapshotter="csi-snapshotter:v1.2.2",
            node_registrar="csi-node-driver-registrar:v1.1.0",
            # The csi-operator v1.0.2 image ships driver v1.0.0. Use v1.2.0
            # after the operator is bumped to v1.0.3.
            driver="csi-tencentcloud-cbs:v1.0.0",
            resizer="csi-resizer:v0.5.0",
        ),
        CSI_VERSION_V1P1: CSIVersion(
            provisioner="csi-provisioner:v1.2.0",
            attacher="csi-attacher:v1.1.0",
            snapshotter="csi-snapshotter:v1.2.2",
            node_registrar="csi-node-driver-registrar:v1.1.0",
            driver="csi-tencentcloud-cbs:v1.2.0",
            resizer="csi-resizer:v0.5.0",
        ),
    },
}


def drivers() -> list[str]:
    """Return all known driver types in sorted order."""
    return sorted(_CSI_VERSION_MAP)


def csi_versions(driver: str) -> list[str]:
    """Return the protocol versions defined for the driver in sorted order.

    An unknown driver has no protocol versions.
    """
    return sorted(_CSI_VERSION_MAP.get(driver, {}))


def find(driver: str, csi_version: str) -> CSIVersion | None:
    """Return the images for the driver and protocol version, if defined."""
    result = _CSI_VERSION_MAP.get(driver, {}).get(csi_version)
    if result is None:
        _LOGGER.debug("No CSI images for driver %s version %s", driver, csi_version)
    return result


def get(driver: str, csi_version: str) -> CSIVersion:
    """Return the images for the driver and protocol version.

    Raises a DriverNotFoundError when the combination is not defined.
    """
    if driver not in _CSI_VERSION_MAP:
        raise DriverNotFoundError(driver)
    if (result := find(driver, csi_version)) is None:
        raise DriverNotFoundError(driver, csi_version)
    return result


def get_images(csi: CSIVersion) -> list[str]:
    """Return the images needed by the CSI components in role order."""
    return [image for getter in ROLES.values() if (image := getter(csi))]


def list_images() -> list[str]:
    """Return the images of every driver and protocol version."""
    items: list[str] = []
    for driver in drivers():
        for csi_version in csi_versions(driver):
            items.extend(get_images(_CSI_VERSION_MAP[driver][csi_version]))
    return items
