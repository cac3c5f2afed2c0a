"""Error types raised by the migration workflow."""

from __future__ import annotations


class MigrationError(Exception):
    """User-facing migration error. The CLI reports it and exits with 1."""


class SubscriptionNotFoundError(MigrationError):
    def __init__(self, subscription_id: str):
        self.subscription_id = subscription_id
        super().__init__(f"Subscription not found: {subscription_id}")


class ResourceGroupNotFoundError(MigrationError):
    def __init__(self, resource_group: str, subscription_id: str):
        self.resource_group = resource_group
        self.subscription_id = subscription_id
        super().__init__(
            f"Resource group {resource_group} not found in subscription {subscription_id}"
        )


class VMNotFoundError(MigrationError):
    def __init__(self, vm_name: str, resource_group: str):
        self.vm_name = vm_name
        self.resource_group = resource_group
        super().__init__(f"VM {vm_name} not found in resource group {resource_group}")


class StorageAccountNotFoundError(MigrationError):
    def __init__(self, account_name: str):
        self.account_name = account_name
        super().__init__(f"Storage account not found: {account_name}")


class NoUnmanagedDisksError(MigrationError):
    """The VM has no VHD-backed disk left to migrate."""


class DiskSizeError(MigrationError):
    """A VHD size falls outside the supported managed-disk tiers."""


class InvalidBlobUriError(MigrationError, ValueError):
    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"Not a blob URI: {uri}")
