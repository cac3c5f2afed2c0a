"""Azure control-plane access for disk migrations.

This module provides:
- AzureContext: credential, active subscription and lazily built SDK clients

Example:
    ```python
    from vhd_migrate.infrastructure import AzureContext

    ctx = AzureContext(subscription_id="sub-123")
    with ctx.activated("sub-456"):
        ctx.compute.disks.get("target-rg", "my-vm-osdisk")
    ```
"""

from vhd_migrate.infrastructure.azure_context import AzureContext

__all__ = [
    "AzureContext",
]
