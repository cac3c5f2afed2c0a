"""CLI for migrating a VM's VHD disks to managed disks.

Usage:
    # Migrate in place (same subscription and resource group)
    python -m vhd_migrate --subscription SUB --resource-group RG --vm-name VM

    # Migrate into another subscription and resource group
    python -m vhd_migrate --subscription SUB --resource-group RG --vm-name VM \
        --target-subscription SUB2 --target-resource-group RG2

    # Show the disks that would be created
    python -m vhd_migrate --resource-group RG --vm-name VM --dry-run --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from vhd_migrate.config import settings
from vhd_migrate.errors import MigrationError
from vhd_migrate.migration import migrate_vm
from vhd_migrate.models import MigrationResult

logger = logging.getLogger(__name__)


def _print_result(result: MigrationResult) -> None:
    plan = result.plan
    header = "Planned disks" if result.dry_run else "Migrated disks"
    print(f"{header} for {plan.source.name} -> "
          f"{plan.target_subscription_id}/{plan.target_resource_group}:")
    for disk in result.disks:
        target = disk.target
        print(f"  {target.name:<32} {target.size_gb:>5} GB  {target.sku:<13} {target.location}")
        if disk.disk_id:
            print(f"    {disk.disk_id}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Migrate an Azure VM's unmanaged VHD disks to managed disks",
        prog="python -m vhd_migrate",
    )
    parser.add_argument("--subscription", type=str, default=settings.azure_subscription_id,
                        help="Source subscription ID (default: AZURE_SUBSCRIPTION_ID)")
    parser.add_argument("--resource-group", "-g", type=str, required=True,
                        help="Resource group of the source VM")
    parser.add_argument("--vm-name", "-n", type=str, required=True, help="Source VM name")
    parser.add_argument("--target-subscription", type=str,
                        help="Subscription for the managed disks (default: source)")
    parser.add_argument("--target-resource-group", type=str,
                        help="Resource group for the managed disks (default: source)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show the disks that would be created without creating them")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.subscription:
        parser.error("--subscription is required when AZURE_SUBSCRIPTION_ID is not set")

    try:
        result = migrate_vm(
            source_subscription=args.subscription,
            resource_group=args.resource_group,
            vm_name=args.vm_name,
            target_subscription=args.target_subscription,
            target_resource_group=args.target_resource_group,
            dry_run=args.dry_run,
        )
    except MigrationError as e:
        logger.error(str(e))
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
