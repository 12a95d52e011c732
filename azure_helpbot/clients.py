"""
Azure management clients shared by the provisioners.
"""

import logging
from typing import Any, Dict

from azure.identity import DefaultAzureCredential
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.storage import StorageManagementClient

from .config import AzureConfig
from .errors import ClientConstructionError
from .models import ClientKind

logger = logging.getLogger(__name__)


class AzureClients:
    """Holds the credential and the management client handles.

    Built once at process start and passed to the provisioners. The SDK
    clients are safe to share between concurrent workflows.
    """

    def __init__(self, credential: Any, resource_client: Any, storage_client: Any):
        self.credential = credential
        self.resource_client = resource_client
        self.storage_client = storage_client
        self._handles: Dict[ClientKind, Any] = {
            ClientKind.RESOURCE_GROUP: resource_client.resource_groups,
            ClientKind.STORAGE_ACCOUNT: storage_client.storage_accounts,
            ClientKind.BLOB_CONTAINER: storage_client.blob_containers,
        }

    def get_client(self, kind: ClientKind) -> Any:
        """Return the operations handle for one kind of resource."""
        return self._handles[ClientKind(kind)]

    def close(self) -> None:
        """Close the management clients and the shared credential."""
        self.resource_client.close()
        self.storage_client.close()
        self.credential.close()
        logger.info("Azure management clients closed")


def create_clients(azure_config: AzureConfig) -> AzureClients:
    """Authenticate and construct the management clients.

    Raises:
        ClientConstructionError: if the credential or any client cannot be built.
    """
    if not azure_config.subscription_id:
        raise ClientConstructionError("AZURE_SUBSCRIPTION_ID is not set")

    try:
        credential = DefaultAzureCredential()
    except Exception as e:
        logger.error(f"Unable to load Azure credentials: {e}")
        raise ClientConstructionError(f"unable to load Azure credentials: {e}") from e

    try:
        resource_client = ResourceManagementClient(
            credential=credential,
            subscription_id=azure_config.subscription_id
        )
        storage_client = StorageManagementClient(
            credential=credential,
            subscription_id=azure_config.subscription_id
        )
    except Exception as e:
        logger.error(f"Issue connecting to Azure management API: {e}")
        raise ClientConstructionError(f"issue connecting to Azure management API: {e}") from e

    logger.info("Azure management clients initialised")
    return AzureClients(credential, resource_client, storage_client)
