"""Data models for VM references, source VHDs and managed-disk targets."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class VMReference:
    """Identifies the source VM."""

    subscription_id: str
    resource_group: str
    name: str


@dataclass
class VhdDescriptor:
    """An unmanaged disk attached to the source VM.

    ``os_type`` is only meaningful for the OS disk. ``size_gb`` is None when the VM
    model does not report a size; the deriver then reads it from the blob.
    """

    uri: str
    position: int
    """0 for the OS disk, 1-based position among the VM's data disks otherwise."""
    size_gb: int | None = None
    os_type: str | None = None
    lun: int | None = None

    @property
    def is_os_disk(self) -> bool:
        return self.position == 0


@dataclass
class VmDisks:
    vm: VMReference
    location: str
    os_disk: VhdDescriptor | None
    data_disks: list[VhdDescriptor] = field(default_factory=list)
    power_state: str | None = None

    def all_disks(self) -> list[VhdDescriptor]:
        """OS disk first, then data disks in the VM's order."""
        disks = [self.os_disk] if self.os_disk else []
        return disks + list(self.data_disks)


@dataclass(frozen=True)
class StorageAccountInfo:
    name: str
    id: str
    resource_group: str
    location: str
    sku: str


@dataclass
class ManagedDiskTarget:
    """Parameters of one managed disk to produce."""

    name: str
    resource_group: str
    subscription_id: str
    size_gb: int
    sku: str
    location: str
    source_uri: str
    storage_account_id: str
    os_type: str | None = None


@dataclass
class MigrationPlan:
    """Resolved source and target of a migration.

    ``create_target_group`` is only ever True across subscriptions: the
    target resource group is created at the first VHD's location.
    """

    source: VMReference
    target_subscription_id: str
    target_resource_group: str
    create_target_group: bool = False

    @property
    def cross_subscription(self) -> bool:
        return self.target_subscription_id != self.source.subscription_id


@dataclass
class MigratedDisk:
    target: ManagedDiskTarget
    disk_id: str | None = None
    temporary_disk_name: str | None = None


@dataclass
class MigrationResult:
    plan: MigrationPlan
    disks: list[MigratedDisk] = field(default_factory=list)
    dry_run: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": asdict(self.plan.source),
            "target_subscription_id": self.plan.target_subscription_id,
            "target_resource_group": self.plan.target_resource_group,
            "cross_subscription": self.plan.cross_subscription,
            "create_target_group": self.plan.create_target_group,
            "dry_run": self.dry_run,
            "disks": [
                {
                    **asdict(disk.target),
                    "disk_id": disk.disk_id,
                    "temporary_disk_name": disk.temporary_disk_name,
                }
                for disk in self.disks
            ],
        }
