"""Read the source VM and extract its VHD-backed disks."""

from __future__ import annotations

import logging
from typing import Any, Optional

from azure.core.exceptions import ResourceNotFoundError

from vhd_migrate.errors import NoUnmanagedDisksError, VMNotFoundError
from vhd_migrate.infrastructure.azure_context import AzureContext
from vhd_migrate.models import VhdDescriptor, VmDisks, VMReference

logger = logging.getLogger(__name__)


def _enum_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", str(value))


def _vhd_uri(disk: Any) -> Optional[str]:
    vhd = getattr(disk, "vhd", None)
    return getattr(vhd, "uri", None) if vhd else None


def get_power_state(ctx: AzureContext, vm: VMReference) -> Optional[str]:
    """Get VM power state code (e.g. "PowerState/deallocated"), or None."""
    view = ctx.compute.virtual_machines.instance_view(vm.resource_group, vm.name)
    for status in view.statuses or []:
        if status.code and status.code.startswith("PowerState/"):
            return status.code
    return None


def inspect_vm(ctx: AzureContext, vm: VMReference) -> VmDisks:
    """Fetch the VM and describe its unmanaged disks.

    Disks that are already managed are skipped with a warning.

    Raises:
        VMNotFoundError: If the VM does not exist.
        NoUnmanagedDisksError: If no disk of the VM is backed by a VHD.
    """
    try:
        model = ctx.compute.virtual_machines.get(vm.resource_group, vm.name)
    except ResourceNotFoundError as e:
        raise VMNotFoundError(vm.name, vm.resource_group) from e

    storage_profile = model.storage_profile
    os_disk = None
    os_uri = _vhd_uri(storage_profile.os_disk)
    if os_uri:
        os_disk = VhdDescriptor(
            uri=os_uri,
            position=0,
            size_gb=storage_profile.os_disk.disk_size_gb,
            os_type=_enum_value(storage_profile.os_disk.os_type),
        )
    else:
        logger.warning(f"OS disk of {vm.name} is already managed, skipping")

    data_disks = []
    for position, disk in enumerate(storage_profile.data_disks or [], start=1):
        uri = _vhd_uri(disk)
        if not uri:
            logger.warning(f"Data disk {disk.name} (LUN {disk.lun}) is already managed, skipping")
            continue
        data_disks.append(
            VhdDescriptor(uri=uri, size_gb=disk.disk_size_gb, lun=disk.lun, position=position)
        )

    if os_disk is None and not data_disks:
        raise NoUnmanagedDisksError(f"VM {vm.name} has no unmanaged disks to migrate")

    power_state = get_power_state(ctx, vm)
    if power_state != "PowerState/deallocated":
        logger.warning(
            f"VM {vm.name} is not deallocated ({power_state or 'unknown state'}); "
            "disks imported from a running VM may be inconsistent"
        )

    logger.info(
        f"VM {vm.name}: {'1 OS disk' if os_disk else 'no OS VHD'}, "
        f"{len(data_disks)} data disk(s) to migrate"
    )
    return VmDisks(
        vm=vm,
        location=model.location,
        os_disk=os_disk,
        data_disks=data_disks,
        power_state=power_state,
    )
