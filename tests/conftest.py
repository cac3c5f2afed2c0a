"""Shared fixtures: an AzureContext backed by MagicMock management clients."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from vhd_migrate.infrastructure.azure_context import AzureContext

SOURCE_SUB = "11111111-1111-1111-1111-111111111111"
TARGET_SUB = "22222222-2222-2222-2222-222222222222"
STORAGE_ACCOUNT_ID = (
    f"/subscriptions/{SOURCE_SUB}/resourceGroups/storage-rg"
    "/providers/Microsoft.Storage/storageAccounts/legacyvhds"
)


def vhd_uri(blob: str, account: str = "legacyvhds") -> str:
    return f"https://{account}.blob.core.windows.net/vhds/{blob}"


def make_vm(
    name: str = "web01",
    os_size: int | None = 30,
    data_sizes: tuple = (100, 600),
    os_managed: bool = False,
    location: str = "westeurope",
):
    """Build an object shaped like azure.mgmt.compute's VirtualMachine."""
    os_disk = SimpleNamespace(
        name=f"{name}-os",
        vhd=None if os_managed else SimpleNamespace(uri=vhd_uri(f"{name}-os.vhd")),
        disk_size_gb=os_size,
        os_type=SimpleNamespace(value="Linux"),
    )
    data_disks = [
        SimpleNamespace(
            name=f"{name}-data{lun}",
            lun=lun,
            vhd=SimpleNamespace(uri=vhd_uri(f"{name}-data{lun}.vhd")),
            disk_size_gb=size,
        )
        for lun, size in enumerate(data_sizes)
    ]
    return SimpleNamespace(
        name=name,
        location=location,
        storage_profile=SimpleNamespace(os_disk=os_disk, data_disks=data_disks),
    )


class FakeAzure:
    """Mock clients for a source and a target subscription.

    Records every disk create/delete call in ``calls`` as
    (operation, subscription_id, resource_group, name).
    """

    def __init__(self, subscriptions=(SOURCE_SUB, TARGET_SUB)):
        self.subscriptions = list(subscriptions)
        self.groups: dict[str, set[str]] = {sub: set() for sub in self.subscriptions}
        self.vms: dict[tuple[str, str], object] = {}
        self.power_state = "PowerState/deallocated"
        self.storage_accounts = [
            SimpleNamespace(
                name="legacyvhds",
                id=STORAGE_ACCOUNT_ID,
                location="westeurope",
                sku=SimpleNamespace(name="Standard_GRS"),
            )
        ]
        self.calls: list[tuple[str, str, str, str]] = []
        self.bodies: dict[tuple[str, str, str], dict] = {}
        self.ctx = AzureContext(credential=object())
        self._install()

    def _install(self) -> None:
        sub_client = MagicMock()
        sub_client.subscriptions.list.side_effect = lambda: [
            SimpleNamespace(subscription_id=sub) for sub in self.subscriptions
        ]
        self.ctx._clients[("subscription", None)] = sub_client
        for sub in self.subscriptions:
            self.ctx._clients[("resource", sub)] = self._resource_client(sub)
            self.ctx._clients[("compute", sub)] = self._compute_client(sub)
            self.ctx._clients[("storage", sub)] = self._storage_client()

    def _resource_client(self, sub: str) -> MagicMock:
        client = MagicMock()
        client.resource_groups.check_existence.side_effect = lambda name: name in self.groups[sub]

        def create_group(name, params):
            self.calls.append(("create_group", sub, name, params["location"]))
            self.groups[sub].add(name)
            return SimpleNamespace(name=name, location=params["location"])

        client.resource_groups.create_or_update.side_effect = create_group
        return client

    def _compute_client(self, sub: str) -> MagicMock:
        client = MagicMock()

        def get_vm(resource_group, name):
            from azure.core.exceptions import ResourceNotFoundError

            try:
                return self.vms[(resource_group, name)]
            except KeyError:
                raise ResourceNotFoundError(f"VM {name} not found")

        client.virtual_machines.get.side_effect = get_vm
        client.virtual_machines.instance_view.side_effect = lambda rg, name: SimpleNamespace(
            statuses=[
                SimpleNamespace(code="ProvisioningState/succeeded"),
                SimpleNamespace(code=self.power_state),
            ]
        )

        def create_disk(resource_group, name, body):
            self.calls.append(("create_disk", sub, resource_group, name))
            self.bodies[(sub, resource_group, name)] = body
            disk_id = (
                f"/subscriptions/{sub}/resourceGroups/{resource_group}"
                f"/providers/Microsoft.Compute/disks/{name}"
            )
            poller = MagicMock()
            poller.result.return_value = SimpleNamespace(id=disk_id, name=name)
            return poller

        def delete_disk(resource_group, name):
            self.calls.append(("delete_disk", sub, resource_group, name))
            return MagicMock()

        client.disks.begin_create_or_update.side_effect = create_disk
        client.disks.begin_delete.side_effect = delete_disk
        return client

    def _storage_client(self) -> MagicMock:
        client = MagicMock()
        client.storage_accounts.list.side_effect = lambda: list(self.storage_accounts)
        client.storage_accounts.list_keys.return_value = SimpleNamespace(
            keys=[SimpleNamespace(value="c2VjcmV0")]
        )
        return client

    def compute(self, sub: str = SOURCE_SUB) -> MagicMock:
        return self.ctx._clients[("compute", sub)]

    def created_disks(self) -> list[tuple[str, str, str]]:
        return [call[1:] for call in self.calls if call[0] == "create_disk"]

    def deleted_disks(self) -> list[tuple[str, str, str]]:
        return [call[1:] for call in self.calls if call[0] == "delete_disk"]


@pytest.fixture
def azure() -> FakeAzure:
    """FakeAzure with a 'legacy-rg' source group holding VM 'web01'."""
    fake = FakeAzure()
    fake.groups[SOURCE_SUB].add("legacy-rg")
    fake.vms[("legacy-rg", "web01")] = make_vm()
    return fake
