"""Resolution of device names to canonical host block device paths."""

import posixpath
from typing import Optional

from ..config import base_config
from ..config.infrastructure_config import DeviceConfig


def default_device_config() -> DeviceConfig:
    return DeviceConfig(
        host_dev_root=base_config.HOST_DEV_ROOT,
        direct_csi_dev_root=base_config.DIRECT_CSI_DEV_ROOT,
        direct_csi_partition_infix=base_config.DIRECT_CSI_PARTITION_INFIX,
        host_partition_infix=base_config.HOST_PARTITION_INFIX,
    )


def _is_under(path: str, root: str) -> bool:
    root = root.rstrip("/")
    return path == (root or "/") or path.startswith(root + "/")


def resolve_root_block_path(dev_name: str, config: Optional[DeviceConfig] = None) -> str:
    """Map a possibly virtualized device name to its host block device path.

    Args:
        dev_name: Kernel name (``sda1``), host path (``/dev/sda1``) or a path
            under the orchestrator device root
            (``/var/lib/direct-csi/devices/sda-part-1``)
        config: Device path settings, defaults to the environment settings

    Returns:
        Path under the host device root, e.g. ``/dev/sda1``
    """
    config = config or default_device_config()
    host_root = config.host_dev_root

    if _is_under(dev_name, host_root):
        return dev_name

    name = dev_name
    if config.direct_csi_dev_root and config.direct_csi_dev_root in name:
        name = posixpath.basename(name)

    infix = config.direct_csi_partition_infix
    if infix:
        name = name.replace(infix, "", 1).replace(infix, config.host_partition_infix)

    path = posixpath.normpath(posixpath.join(host_root, name.lstrip("/")))
    if not _is_under(path, host_root):
        # ".." components walked out of the device root
        path = posixpath.normpath(posixpath.join(host_root, posixpath.basename(path)))
    return path
