"""vhd-migrate: move Azure VM disks from unmanaged VHD blobs to managed disks.

This package provides:
- migrate_vm: resolve, inspect, derive and create managed disks for a VM
- AzureContext: credential and active-subscription handling
- Data models describing source VHDs and managed-disk targets

Quick Start:
    ```python
    from vhd_migrate import migrate_vm

    result = migrate_vm(
        source_subscription="sub-123",
        resource_group="legacy-rg",
        vm_name="web01",
    )
    for disk in result.disks:
        print(disk.target.name, disk.disk_id)
    ```
"""

__version__ = "0.1.0"

from vhd_migrate.errors import (
    DiskSizeError,
    InvalidBlobUriError,
    MigrationError,
    NoUnmanagedDisksError,
    ResourceGroupNotFoundError,
    StorageAccountNotFoundError,
    SubscriptionNotFoundError,
    VMNotFoundError,
)
from vhd_migrate.infrastructure import AzureContext
from vhd_migrate.migration import migrate_vm
from vhd_migrate.models import (
    ManagedDiskTarget,
    MigratedDisk,
    MigrationPlan,
    MigrationResult,
    VhdDescriptor,
    VMReference,
)
from vhd_migrate.sizing import DISK_SIZE_TIERS, bucket_disk_size, managed_disk_name

__all__ = [
    "__version__",
    # Workflow
    "migrate_vm",
    "AzureContext",
    # Models
    "ManagedDiskTarget",
    "MigratedDisk",
    "MigrationPlan",
    "MigrationResult",
    "VhdDescriptor",
    "VMReference",
    # Sizing
    "DISK_SIZE_TIERS",
    "bucket_disk_size",
    "managed_disk_name",
    # Errors
    "DiskSizeError",
    "InvalidBlobUriError",
    "MigrationError",
    "NoUnmanagedDisksError",
    "ResourceGroupNotFoundError",
    "StorageAccountNotFoundError",
    "SubscriptionNotFoundError",
    "VMNotFoundError",
]
