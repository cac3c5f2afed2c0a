"""Managed-disk size tiers and naming."""

from __future__ import annotations

import math

from vhd_migrate.errors import DiskSizeError

# Managed disk sizes (GB) a VHD is rounded up to
DISK_SIZE_TIERS = (32, 64, 128, 256, 512, 1024, 2048)

GIB = 1024**3


def bucket_disk_size(size_gb: int) -> int:
    """Return the smallest tier that is >= size_gb.

    Raises:
        DiskSizeError: If size_gb is not positive or exceeds the largest tier.
    """
    if size_gb <= 0:
        raise DiskSizeError(f"Invalid disk size: {size_gb} GB")
    for tier in DISK_SIZE_TIERS:
        if size_gb <= tier:
            return tier
    raise DiskSizeError(
        f"Disk size {size_gb} GB exceeds the largest supported tier ({DISK_SIZE_TIERS[-1]} GB)"
    )


def bytes_to_gb(size_bytes: int) -> int:
    """Round a byte count up to whole GiB."""
    return math.ceil(size_bytes / GIB)


def managed_disk_name(vm_name: str, position: int) -> str:
    """Name of the managed disk for the OS disk (0) or the Nth data disk."""
    if position == 0:
        return f"{vm_name}-osdisk"
    return f"{vm_name}-datadisk{position:02d}"
