"""
Blob container provisioning.
"""

from .clients import AzureClients
from .models import ClientKind, ContainerInfo, enum_value


class BlobContainerProvisioner:
    """Creates private blob containers inside a storage account."""

    def __init__(self, clients: AzureClients):
        self.client = clients.get_client(ClientKind.BLOB_CONTAINER)

    def create(self, resource_group: str, storage_account: str, name: str) -> ContainerInfo:
        container = self.client.create(
            resource_group,
            storage_account,
            name,
            {"public_access": "None"}
        )
        return ContainerInfo(
            name=container.name,
            storage_account=storage_account,
            resource_group=resource_group,
            id=container.id,
            public_access=enum_value(container.public_access)
        )
