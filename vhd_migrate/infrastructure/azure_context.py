"""Azure control-plane context for disk migrations.

Holds the credential and the *active subscription*, and lazily builds the
Azure SDK management clients for it. Switching the active subscription is
the Python counterpart of changing the current Azure PowerShell/CLI context:
every client handed out afterwards targets the new subscription.

DefaultAzureCredential automatically tries (in order):
    1. Environment variables (AZURE_CLIENT_ID + SECRET + TENANT_ID)
    2. Workload identity (Kubernetes)
    3. Managed identity (Azure VMs)
    4. Azure CLI credential (az login)
    5. Azure PowerShell credential
    6. Interactive browser

Example:
    from vhd_migrate.infrastructure.azure_context import AzureContext

    ctx = AzureContext(subscription_id="sub-123")
    vm = ctx.compute.virtual_machines.get("my-rg", "my-vm")

    with ctx.activated("sub-456"):
        ctx.resources.resource_groups.check_existence("target-rg")
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

logger = logging.getLogger(__name__)


def _get_credential():
    """Get Azure credential.

    Priority:
        1. Service principal (if AZURE_CLIENT_ID + SECRET + TENANT_ID set)
        2. DefaultAzureCredential (CLI login, managed identity, etc.)
    """
    from azure.identity import ClientSecretCredential, DefaultAzureCredential

    from vhd_migrate.config import settings

    if all(
        [
            settings.azure_client_id,
            settings.azure_client_secret,
            settings.azure_tenant_id,
        ]
    ):
        logger.info("Using service principal authentication")
        return ClientSecretCredential(
            tenant_id=settings.azure_tenant_id,
            client_id=settings.azure_client_id,
            client_secret=settings.azure_client_secret,
        )

    logger.info("Using DefaultAzureCredential")
    return DefaultAzureCredential()


@dataclass
class AzureContext:
    """Credential plus the currently active subscription.

    Args:
        subscription_id: Initially active subscription.
        credential: Optional Azure SDK credential. If None, one is built on
            first use (service principal from settings, else
            DefaultAzureCredential).
    """

    subscription_id: str | None = None
    credential: Any = None
    switches: list[str] = field(default_factory=list)
    """Subscriptions switched to, in order. Initial activation is not a switch."""

    def __post_init__(self) -> None:
        # (kind, subscription_id) -> client
        self._clients: dict[tuple[str, str | None], Any] = {}

    def _get_credential(self):
        if self.credential is None:
            self.credential = _get_credential()
        return self.credential

    def _client(self, kind: str, subscription_id: str | None = None):
        """Lazy-load a management client for a subscription (default: active)."""
        subscription_id = subscription_id or self.subscription_id
        if subscription_id is None:
            raise RuntimeError("No active subscription; call activate() first")

        key = (kind, subscription_id)
        if key not in self._clients:
            cred = self._get_credential()
            if kind == "compute":
                from azure.mgmt.compute import ComputeManagementClient

                self._clients[key] = ComputeManagementClient(cred, subscription_id)
            elif kind == "resource":
                from azure.mgmt.resource import ResourceManagementClient

                self._clients[key] = ResourceManagementClient(cred, subscription_id)
            elif kind == "storage":
                from azure.mgmt.storage import StorageManagementClient

                self._clients[key] = StorageManagementClient(cred, subscription_id)
            else:
                raise ValueError(f"Unknown client kind: {kind}")
        return self._clients[key]

    # =========================================================================
    # Clients for the active subscription
    # =========================================================================

    @property
    def compute(self):
        return self._client("compute")

    @property
    def resources(self):
        return self._client("resource")

    @property
    def storage(self):
        return self._client("storage")

    def resource_client(self, subscription_id: str | None = None):
        """Resource client for any subscription, without switching."""
        return self._client("resource", subscription_id)

    # =========================================================================
    # Subscription handling
    # =========================================================================

    def list_subscription_ids(self) -> list[str]:
        """Subscription IDs visible to the credential."""
        key = ("subscription", None)
        if key not in self._clients:
            from azure.mgmt.resource import SubscriptionClient

            self._clients[key] = SubscriptionClient(self._get_credential())
        return [sub.subscription_id for sub in self._clients[key].subscriptions.list()]

    def activate(self, subscription_id: str) -> None:
        """Set the active subscription without recording a switch."""
        self.subscription_id = subscription_id

    def switch(self, subscription_id: str) -> None:
        """Make another subscription active. No-op if it already is."""
        if subscription_id == self.subscription_id:
            return
        logger.info(f"Switching context to subscription {subscription_id}")
        self.subscription_id = subscription_id
        self.switches.append(subscription_id)

    @contextmanager
    def activated(self, subscription_id: str) -> Iterator[AzureContext]:
        """Switch to a subscription for the duration of the block, then back."""
        previous = self.subscription_id
        self.switch(subscription_id)
        try:
            yield self
        finally:
            if previous is not None:
                self.switch(previous)

    def resource_group_exists(self, name: str, subscription_id: str | None = None) -> bool:
        return bool(self.resource_client(subscription_id).resource_groups.check_existence(name))
