"""Create managed disks from VHDs, in the same or in another subscription."""

from __future__ import annotations

import logging
from typing import Any

from vhd_migrate.config import settings
from vhd_migrate.infrastructure.azure_context import AzureContext
from vhd_migrate.models import ManagedDiskTarget, MigratedDisk, MigrationPlan

logger = logging.getLogger(__name__)


def _disk_body(target: ManagedDiskTarget, creation_data: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {
        "location": target.location,
        "sku": {"name": target.sku},
        "disk_size_gb": target.size_gb,
        "creation_data": creation_data,
    }
    if target.os_type:
        body["os_type"] = target.os_type
    return body


def ensure_resource_group(ctx: AzureContext, name: str, location: str) -> bool:
    """Create a resource group in the active subscription if it is missing.

    Returns:
        True if the group was created.
    """
    if ctx.resource_group_exists(name):
        return False
    logger.info(f"Creating resource group {name} in {location}")
    ctx.resources.resource_groups.create_or_update(name, {"location": location})
    return True


def import_disk(
    ctx: AzureContext, target: ManagedDiskTarget, resource_group: str, name: str
) -> str:
    """Create a managed disk from the VHD blob in the active subscription."""
    logger.info(f"Importing {target.source_uri} as {resource_group}/{name}")
    body = _disk_body(
        target,
        {
            "create_option": "Import",
            "source_uri": target.source_uri,
            "storage_account_id": target.storage_account_id,
        },
    )
    disk = ctx.compute.disks.begin_create_or_update(resource_group, name, body).result()
    return disk.id


def copy_disk(ctx: AzureContext, target: ManagedDiskTarget, source_disk_id: str) -> str:
    """Create the target disk as a copy of another managed disk."""
    logger.info(f"Copying {source_disk_id} to {target.resource_group}/{target.name}")
    body = _disk_body(target, {"create_option": "Copy", "source_resource_id": source_disk_id})
    disk = ctx.compute.disks.begin_create_or_update(
        target.resource_group, target.name, body
    ).result()
    return disk.id


def delete_disk(ctx: AzureContext, resource_group: str, name: str) -> None:
    logger.info(f"Deleting temporary disk {resource_group}/{name}")
    ctx.compute.disks.begin_delete(resource_group, name).result()


def materialize(ctx: AzureContext, target: ManagedDiskTarget, plan: MigrationPlan) -> MigratedDisk:
    """Produce the managed disk described by target.

    Same subscription: a single import into the target resource group.
    Across subscriptions: import into a temporary disk in the source
    resource group, copy it into the target subscription, then delete the
    temporary disk. The active subscription is the source again on return.
    """
    if not plan.cross_subscription:
        disk_id = import_disk(ctx, target, target.resource_group, target.name)
        logger.info(f"Created managed disk {disk_id}")
        return MigratedDisk(target=target, disk_id=disk_id)

    source_group = plan.source.resource_group
    temp_name = f"{target.name}{settings.temp_disk_suffix}"
    temp_id = import_disk(ctx, target, source_group, temp_name)
    try:
        with ctx.activated(plan.target_subscription_id):
            if plan.create_target_group:
                ensure_resource_group(ctx, target.resource_group, target.location)
                plan.create_target_group = False
            disk_id = copy_disk(ctx, target, temp_id)
    except BaseException:
        # The copy error is the one to report
        try:
            delete_disk(ctx, source_group, temp_name)
        except Exception:
            logger.exception(f"Failed to delete temporary disk {source_group}/{temp_name}")
        raise
    delete_disk(ctx, source_group, temp_name)

    logger.info(f"Created managed disk {disk_id}")
    return MigratedDisk(target=target, disk_id=disk_id, temporary_disk_name=temp_name)
