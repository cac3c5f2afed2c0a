"""VHD to managed disk migration workflow.

Example:
    from vhd_migrate import migrate_vm

    result = migrate_vm(
        source_subscription="sub-123",
        resource_group="legacy-rg",
        vm_name="web01",
        target_subscription="sub-456",
        target_resource_group="web-rg",
    )
    for disk in result.disks:
        print(disk.disk_id)
"""

from __future__ import annotations

import logging

from vhd_migrate.context import resolve_context
from vhd_migrate.deriver import derive_target
from vhd_migrate.infrastructure.azure_context import AzureContext
from vhd_migrate.inspector import inspect_vm
from vhd_migrate.materializer import materialize
from vhd_migrate.models import MigratedDisk, MigrationResult

logger = logging.getLogger(__name__)


def migrate_vm(
    source_subscription: str,
    resource_group: str,
    vm_name: str,
    target_subscription: str | None = None,
    target_resource_group: str | None = None,
    context: AzureContext | None = None,
    dry_run: bool = False,
) -> MigrationResult:
    """Migrate every VHD of a VM to a managed disk.

    Args:
        source_subscription: Subscription holding the VM.
        resource_group: Resource group of the VM.
        vm_name: VM name.
        target_subscription: Subscription for the managed disks. Defaults to
            the source subscription.
        target_resource_group: Resource group for the managed disks.
            Defaults to the source resource group.
        context: AzureContext to use. A new one is created if None.
        dry_run: Only derive the target disks, create nothing.

    Returns:
        MigrationResult with one entry per migrated disk, OS disk first.

    Raises:
        MigrationError: If a subscription, resource group or the VM is
            missing, or a disk cannot be mapped to a managed disk.
    """
    ctx = context or AzureContext()
    plan = resolve_context(
        ctx,
        source_subscription,
        resource_group,
        vm_name,
        target_subscription=target_subscription,
        target_resource_group=target_resource_group,
    )
    if plan.cross_subscription:
        logger.info(
            f"Migrating {vm_name} across subscriptions: "
            f"{source_subscription} -> {plan.target_subscription_id}/{plan.target_resource_group}"
        )
    else:
        logger.info(f"Migrating {vm_name} into resource group {plan.target_resource_group}")

    vm_disks = inspect_vm(ctx, plan.source)
    targets = [derive_target(ctx, vhd, plan, vm_name) for vhd in vm_disks.all_disks()]

    result = MigrationResult(plan=plan, dry_run=dry_run)
    if dry_run:
        result.disks = [MigratedDisk(target=target) for target in targets]
        logger.info(f"Dry run: {len(targets)} disk(s) would be created")
        return result

    for target in targets:
        result.disks.append(materialize(ctx, target, plan))

    logger.info(f"Migrated {len(result.disks)} disk(s) of {vm_name}")
    return result
