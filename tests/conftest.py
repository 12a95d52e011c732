from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from azure_helpbot.clients import AzureClients
from azure_helpbot.workflow import ProvisioningWorkflow

DEFAULT_LOCATION = "eastus"


def fake_resource_group(name, location):
    return SimpleNamespace(
        id=f"/subscriptions/sub/resourceGroups/{name}",
        name=name,
        location=location,
        properties=SimpleNamespace(provisioning_state="Succeeded")
    )


def fake_storage_account(name, location):
    return SimpleNamespace(
        id=f"/subscriptions/sub/resourceGroups/foo-rg/providers/Microsoft.Storage/storageAccounts/{name}",
        name=name,
        location=location,
        kind="StorageV2",
        sku=SimpleNamespace(name="Standard_LRS"),
        access_tier="Cool",
        provisioning_state="Succeeded"
    )


def fake_blob_container(name):
    return SimpleNamespace(id=f"/containers/{name}", name=name, public_access="None")


@pytest.fixture
def resource_client():
    client = MagicMock()
    client.resource_groups.check_existence.return_value = False
    client.resource_groups.create_or_update.side_effect = (
        lambda name, params: fake_resource_group(name, params["location"])
    )
    return client


@pytest.fixture
def storage_client():
    client = MagicMock()
    client.storage_accounts.check_name_availability.return_value = SimpleNamespace(
        name_available=True, reason=None, message=None
    )

    def begin_create(resource_group, name, params):
        poller = MagicMock()
        poller.result.return_value = fake_storage_account(name, params["location"])
        return poller

    client.storage_accounts.begin_create.side_effect = begin_create
    client.blob_containers.create.side_effect = (
        lambda resource_group, account, name, params: fake_blob_container(name)
    )
    return client


@pytest.fixture
def clients(resource_client, storage_client):
    return AzureClients(MagicMock(), resource_client, storage_client)


@pytest.fixture
def workflow(clients):
    return ProvisioningWorkflow.from_clients(
        clients, DEFAULT_LOCATION, today=lambda: date(2024, 6, 1)
    )
