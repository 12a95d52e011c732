"""
Storage account provisioning.
"""

import logging
from typing import Any, Dict

from .clients import AzureClients
from .models import AccountInfo, AvailabilityResult, ClientKind, enum_value

STORAGE_ACCOUNT_RESOURCE_TYPE = "Microsoft.Storage/storageAccounts"

ENCRYPTED_SERVICE = {"key_type": "Account", "enabled": True}


def storage_account_parameters(location: str) -> Dict[str, Any]:
    """Fixed creation settings: StorageV2, Standard_LRS, Cool tier, encrypted at rest."""
    return {
        "location": location,
        "kind": "StorageV2",
        "sku": {"name": "Standard_LRS"},
        "access_tier": "Cool",
        "encryption": {
            "key_source": "Microsoft.Storage",
            "services": {
                "file": dict(ENCRYPTED_SERVICE),
                "blob": dict(ENCRYPTED_SERVICE),
                "queue": dict(ENCRYPTED_SERVICE),
                "table": dict(ENCRYPTED_SERVICE),
            },
        },
    }


class StorageAccountProvisioner:
    """Checks storage account names and creates storage accounts."""

    def __init__(self, clients: AzureClients, default_location: str):
        self.client = clients.get_client(ClientKind.STORAGE_ACCOUNT)
        self.default_location = default_location
        self.logger = logging.getLogger(__name__)

    def check_name_available(self, name: str) -> AvailabilityResult:
        """Ask Azure whether the name is free across all subscriptions."""
        result = self.client.check_name_availability(
            {"name": name, "type": STORAGE_ACCOUNT_RESOURCE_TYPE}
        )
        return AvailabilityResult(
            available=bool(result.name_available),
            message=result.message or "",
            reason=enum_value(result.reason)
        )

    def create(self, resource_group: str, name: str, location: str = "") -> AccountInfo:
        """Create the storage account and wait for the long-running operation."""
        location = location or self.default_location

        poller = self.client.begin_create(
            resource_group, name, storage_account_parameters(location)
        )
        self.logger.debug(f"Waiting for storage account {name} to be provisioned")
        account = poller.result()

        sku = getattr(account, "sku", None)
        return AccountInfo(
            name=account.name,
            location=account.location,
            resource_group=resource_group,
            id=account.id,
            kind=enum_value(account.kind),
            sku=enum_value(getattr(sku, "name", None)),
            access_tier=enum_value(account.access_tier),
            provisioning_state=enum_value(account.provisioning_state)
        )
