"""
Resource group provisioning.
"""

import logging

from azure.core.exceptions import HttpResponseError

from .clients import AzureClients
from .errors import InvalidLocationError
from .models import ClientKind, ResourceGroupInfo, enum_value

LOCATION_NOT_AVAILABLE = "LocationNotAvailableForResourceGroup"


class ResourceGroupProvisioner:
    """Checks for and creates resource groups."""

    def __init__(self, clients: AzureClients, default_location: str):
        self.client = clients.get_client(ClientKind.RESOURCE_GROUP)
        self.default_location = default_location
        self.logger = logging.getLogger(__name__)

    def exists(self, name: str) -> bool:
        """Return True only when Azure reports that the resource group exists."""
        return self.client.check_existence(name) is True

    def create_or_reuse(self, name: str, location: str = "") -> ResourceGroupInfo:
        """Create the resource group, or update it in place if it already exists.

        Raises:
            InvalidLocationError: if Azure does not accept the location for
                resource groups.
        """
        location = location or self.default_location
        self.logger.debug(f"Creating or updating resource group {name} in {location}")

        try:
            resource_group = self.client.create_or_update(name, {"location": location})
        except HttpResponseError as e:
            if _error_code(e) == LOCATION_NOT_AVAILABLE:
                raise InvalidLocationError(LOCATION_NOT_AVAILABLE) from e
            raise

        properties = getattr(resource_group, "properties", None)
        return ResourceGroupInfo(
            name=resource_group.name,
            location=resource_group.location,
            id=resource_group.id,
            provisioning_state=enum_value(getattr(properties, "provisioning_state", None))
        )


def _error_code(error: HttpResponseError):
    if error.error is not None and error.error.code:
        return error.error.code
    return getattr(error, "code", None)
