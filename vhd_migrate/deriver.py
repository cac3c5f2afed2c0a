"""Derive managed-disk parameters from a source VHD and its storage account."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from vhd_migrate.errors import InvalidBlobUriError, StorageAccountNotFoundError
from vhd_migrate.infrastructure.azure_context import AzureContext
from vhd_migrate.models import ManagedDiskTarget, MigrationPlan, StorageAccountInfo, VhdDescriptor
from vhd_migrate.sizing import bucket_disk_size, bytes_to_gb, managed_disk_name

logger = logging.getLogger(__name__)

PREMIUM_SKU = "Premium_LRS"
STANDARD_SKU = "Standard_LRS"


def parse_blob_uri(uri: str) -> tuple[str, str, str]:
    """Split a blob URI into (storage account, container, blob name).

    Example:
        >>> parse_blob_uri("https://acct.blob.core.windows.net/vhds/vm-os.vhd")
        ('acct', 'vhds', 'vm-os.vhd')
    """
    parsed = urlparse(uri)
    account = parsed.netloc.split(".")[0]
    container, _, blob = parsed.path.lstrip("/").partition("/")
    if not account or not container or not blob:
        raise InvalidBlobUriError(uri)
    return account, container, blob


def _resource_group_from_id(resource_id: str) -> str:
    parts = resource_id.split("/")
    for i, part in enumerate(parts):
        if part.lower() == "resourcegroups" and i + 1 < len(parts):
            return parts[i + 1]
    raise ValueError(f"No resource group in resource ID: {resource_id}")


def find_storage_account(ctx: AzureContext, name: str) -> StorageAccountInfo:
    """Look up a storage account by name in the active subscription."""
    for account in ctx.storage.storage_accounts.list():
        if account.name.lower() == name.lower():
            return StorageAccountInfo(
                name=account.name,
                id=account.id,
                resource_group=_resource_group_from_id(account.id),
                location=account.location,
                sku=getattr(account.sku.name, "value", account.sku.name),
            )
    raise StorageAccountNotFoundError(name)


def managed_sku_for(storage_sku: str) -> str:
    """Map a storage account SKU (e.g. Standard_GRS) to a managed disk SKU."""
    if storage_sku.lower().startswith("premium"):
        return PREMIUM_SKU
    return STANDARD_SKU


def read_blob_size_gb(ctx: AzureContext, account: StorageAccountInfo, uri: str) -> int:
    """Read a page blob's size with the storage account key."""
    from azure.storage.blob import BlobClient

    keys = ctx.storage.storage_accounts.list_keys(account.resource_group, account.name)
    storage_key = keys.keys[0].value
    blob = BlobClient.from_blob_url(uri, credential=storage_key)
    size_bytes = blob.get_blob_properties().size
    return bytes_to_gb(size_bytes)


def derive_target(
    ctx: AzureContext,
    vhd: VhdDescriptor,
    plan: MigrationPlan,
    vm_name: str,
) -> ManagedDiskTarget:
    """Compute the managed disk to produce for one VHD.

    Location and SKU come from the VHD's storage account, the size is
    rounded up to the next tier, and the name follows the disk's position.
    """
    account_name, _, _ = parse_blob_uri(vhd.uri)
    account = find_storage_account(ctx, account_name)

    size_gb = vhd.size_gb
    if not size_gb:
        size_gb = read_blob_size_gb(ctx, account, vhd.uri)
        logger.info(f"Size of {vhd.uri} not reported by VM, read {size_gb} GB from blob")

    target = ManagedDiskTarget(
        name=managed_disk_name(vm_name, vhd.position),
        resource_group=plan.target_resource_group,
        subscription_id=plan.target_subscription_id,
        size_gb=bucket_disk_size(size_gb),
        sku=managed_sku_for(account.sku),
        location=account.location,
        source_uri=vhd.uri,
        storage_account_id=account.id,
        os_type=vhd.os_type if vhd.is_os_disk else None,
    )
    logger.info(
        f"{target.name}: {size_gb} GB -> {target.size_gb} GB, {target.sku}, {target.location}"
    )
    return target
