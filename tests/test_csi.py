"""Tests for the CSI driver catalog."""

import pytest

from csi_images import csi
from csi_images.csi import CSIVersion
from csi_images.exceptions import DriverNotFoundError, ObjectNotFoundError


def test_drivers() -> None:
    """Test the drivers are listed in sorted order."""
    assert csi.drivers() == [
        csi.CSI_DRIVER_TENCENT_CBS,
        csi.CSI_DRIVER_CEPH_FS,
        csi.CSI_DRIVER_CEPH_RBD,
    ]


@pytest.mark.parametrize(
    ("driver", "expected"),
    [
        (csi.CSI_DRIVER_CEPH_RBD, [csi.CSI_VERSION_V0, csi.CSI_VERSION_V1]),
        (csi.CSI_DRIVER_CEPH_FS, [csi.CSI_VERSION_V0, csi.CSI_VERSION_V1]),
        (
            csi.CSI_DRIVER_TENCENT_CBS,
            [csi.CSI_VERSION_V0, csi.CSI_VERSION_V1, csi.CSI_VERSION_V1P1],
        ),
        ("csi-unknown", []),
    ],
)
def test_csi_versions(driver: str, expected: list[str]) -> None:
    """Test the protocol versions of each driver."""
    assert csi.csi_versions(driver) == expected


def test_get_images_role_order() -> None:
    """Images are returned in role order with unset roles removed."""
    sidecars = CSIVersion(
        provisioner="csi-provisioner:v1.2.0",
        attacher="csi-attacher:v1.1.0",
    )
    assert csi.get_images(sidecars) == [
        "csi-attacher:v1.1.0",
        "csi-provisioner:v1.2.0",
    ]


def test_get_images_empty() -> None:
    """A bundle without any images."""
    assert csi.get_images(CSIVersion()) == []


def test_get_images_all_roles() -> None:
    """Test the order of every role."""
    sidecars = CSIVersion(
        provisioner="provisioner:1",
        attacher="attacher:1",
        resizer="resizer:1",
        snapshotter="snapshotter:1",
        liveness_probe="livenessprobe:1",
        node_registrar="node-registrar:1",
        cluster_registrar="cluster-registrar:1",
        driver="driver:1",
    )
    assert csi.get_images(sidecars) == [
        "attacher:1",
        "provisioner:1",
        "snapshotter:1",
        "resizer:1",
        "livenessprobe:1",
        "node-registrar:1",
        "cluster-registrar:1",
        "driver:1",
    ]


def test_find() -> None:
    """Test looking up the images of a driver."""
    sidecars = csi.find(csi.CSI_DRIVER_TENCENT_CBS, csi.CSI_VERSION_V1)
    assert sidecars is not None
    assert csi.get_images(sidecars) == [
        "csi-attacher:v1.1.0",
        "csi-provisioner:v1.2.0",
        "csi-snapshotter:v1.2.2",
        "csi-resizer:v0.5.0",
        "csi-node-driver-registrar:v1.1.0",
        "csi-tencentcloud-cbs:v1.0.0",
    ]


@pytest.mark.parametrize(
    ("driver", "csi_version"),
    [
        ("csi-unknown", csi.CSI_VERSION_V1),
        (csi.CSI_DRIVER_CEPH_RBD, csi.CSI_VERSION_V1P1),
    ],
    ids=["unknown-driver", "unknown-version"],
)
def test_find_undefined(driver: str, csi_version: str) -> None:
    """An undefined combination is not found."""
    assert csi.find(driver, csi_version) is None


def test_get() -> None:
    """Test looking up the images of a driver that must exist."""
    sidecars = csi.get(csi.CSI_DRIVER_CEPH_RBD, csi.CSI_VERSION_V0)
    assert sidecars.driver == "rbdplugin:v0.3.0"
    assert sidecars.resizer == ""


def test_get_unknown_driver() -> None:
    """Test the error for an unknown driver."""
    with pytest.raises(DriverNotFoundError, match="'csi-unknown' is not defined"):
        csi.get("csi-unknown", csi.CSI_VERSION_V1)


def test_get_unknown_version() -> None:
    """Test the error for an unknown protocol version."""
    with pytest.raises(ObjectNotFoundError, match="no images for CSI version 'v9.9'"):
        csi.get(csi.CSI_DRIVER_CEPH_FS, "v9.9")


def test_get_role() -> None:
    """Test looking up an image by role name."""
    sidecars = csi.get(csi.CSI_DRIVER_CEPH_RBD, csi.CSI_VERSION_V1)
    assert sidecars.get("liveness-probe") == "livenessprobe:v1.1.0"
    assert sidecars.get("driver") == "rbdplugin:v1.0.0"
    # Known role that is not required
    assert sidecars.get("resizer") == ""
    assert sidecars.get("unknown") is None
    assert sidecars.get("liveness_probe") is None


def test_serialize() -> None:
    """Only the required roles are serialized."""
    sidecars = csi.get(csi.CSI_DRIVER_CEPH_FS, csi.CSI_VERSION_V0)
    assert sidecars.to_dict() == {
        "provisioner": "csi-provisioner:v0.4.2",
        "attacher": "csi-attacher:v0.4.2",
        "liveness_probe": "livenessprobe:v0.4.1",
        "node_registrar": "driver-registrar:v0.3.0",
        "driver": "cephfsplugin:v0.3.0",
    }


def test_all_images_tagged() -> None:
    """Every image of every driver has a tag."""
    for driver in csi.drivers():
        for csi_version in csi.csi_versions(driver):
            for image in csi.get_images(csi.get(driver, csi_version)):
                name, _, tag = image.partition(":")
                assert name, image
                assert tag, image


def test_list_images() -> None:
    """Images are listed in sorted driver and protocol version order."""
    items = csi.list_images()
    assert len(items) == 38
    assert items[:4] == [
        "csi-attacher:v0.4.2",
        "csi-provisioner:v0.4.2",
        "driver-registrar:v0.3.0",
        "csi-tencentcloud-cbs:v0.2.1",
    ]
    assert items[-1] == "rbdplugin:v1.0.0"


def test_roles_read_only() -> None:
    """The role table cannot be changed at runtime."""
    assert list(csi.ROLES)[0] == "attacher"
    with pytest.raises(TypeError):
        csi.ROLES["extra"] = lambda sidecars: "extra:1"  # type: ignore[index]
    assert "extra" not in csi.ROLES


def test_serialize_omits_unset_roles() -> None:
    """Roles that are not required are left out of the dict."""
    sidecars = csi.get(csi.CSI_DRIVER_TENCENT_CBS, csi.CSI_VERSION_V0)
    result = sidecars.to_dict()
    for role in ("resizer", "snapshotter", "liveness_probe", "cluster_registrar"):
        assert role not in result
