"""
Provisioning workflow: resource group, then storage account, then optionally
a blob container.
"""

import logging
import threading
from datetime import date
from typing import Callable, Optional

from .blob_containers import BlobContainerProvisioner
from .clients import AzureClients
from .errors import InvalidResourceTypeError, ProvisioningCancelledError
from .models import (
    ProvisioningOutcome, ProvisioningStatus, ProvisioningStep, ResourceType
)
from .naming import dated_name, resource_group_name
from .resource_groups import ResourceGroupProvisioner
from .storage_accounts import StorageAccountProvisioner

STORAGE_ACCOUNT_CREATED = ":white_check_mark: Storage account '{account}' created successfully in resource group '{group}'"
BLOB_CONTAINER_CREATED = (
    ":white_check_mark: Blob Container '{container}' and Storage account '{account}' "
    "created successfully in resource group '{group}'"
)
DUPLICATE_NAME_WARNING = ":warning: {message}"


class ProvisioningWorkflow:
    """Runs the provisioning steps in order.

    Steps run strictly one after another. There is no rollback: if a later
    step fails, resources created by earlier steps are left in place.
    """

    def __init__(
        self,
        resource_groups: ResourceGroupProvisioner,
        storage_accounts: StorageAccountProvisioner,
        blob_containers: BlobContainerProvisioner,
        today: Callable[[], date] = date.today
    ):
        self.resource_groups = resource_groups
        self.storage_accounts = storage_accounts
        self.blob_containers = blob_containers
        self.today = today
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_clients(cls, clients: AzureClients, default_location: str, **kwargs) -> "ProvisioningWorkflow":
        return cls(
            ResourceGroupProvisioner(clients, default_location),
            StorageAccountProvisioner(clients, default_location),
            BlobContainerProvisioner(clients),
            **kwargs
        )

    def run(
        self,
        base_name: str,
        resource_type: str,
        location: str = "",
        cancel_event: Optional[threading.Event] = None
    ) -> str:
        """
        Provision the requested resources and return the chat message to show.

        Args:
            base_name: Base name used to derive every resource name
            resource_type: "storage-account" or "blob-container"
            location: Azure region; the default region is used when empty
            cancel_event: When set, no further step is started

        Returns:
            str: A success message, or a warning if the storage account name
            is already taken

        Raises:
            InvalidResourceTypeError: if resource_type is not recognised. The
                resource group has already been created by then.
            InvalidLocationError: if Azure rejects the resource group location.
            ProvisioningCancelledError: if cancel_event was set between steps.
            HttpResponseError: for any other error reported by Azure.
        """
        outcome = self.execute(base_name, resource_type, location, cancel_event)
        if outcome.status == ProvisioningStatus.FAILED:
            raise outcome.error
        return outcome.message

    def execute(
        self,
        base_name: str,
        resource_type: str,
        location: str = "",
        cancel_event: Optional[threading.Event] = None
    ) -> ProvisioningOutcome:
        """Run the workflow and report the outcome, including which steps completed."""
        outcome = ProvisioningOutcome(status=ProvisioningStatus.FAILED)
        try:
            self._provision(outcome, base_name, resource_type, location, cancel_event or threading.Event())
        except ProvisioningCancelledError as e:
            self.logger.warning(f"Provisioning of {resource_type} '{base_name}' cancelled: {e}")
            outcome.error = e
            outcome.message = str(e)
        except Exception as e:
            self.logger.error(f"Provisioning of {resource_type} '{base_name}' failed: {e}")
            outcome.status = ProvisioningStatus.FAILED
            outcome.error = e
            outcome.message = str(e)
        return outcome

    def _provision(
        self,
        outcome: ProvisioningOutcome,
        base_name: str,
        resource_type: str,
        location: str,
        cancel_event: threading.Event
    ) -> None:
        def start(step: ProvisioningStep) -> None:
            # An in-flight SDK call cannot be interrupted; stop before the next one
            if cancel_event.is_set():
                raise ProvisioningCancelledError(step)

        group_name = resource_group_name(base_name)

        start(ProvisioningStep.CHECK_RESOURCE_GROUP)

        # The create call below runs either way; the check only decides what gets logged.
        if self.resource_groups.exists(group_name):
            self.logger.info(f"Resource Group already exists will re-use: {group_name}")
        outcome.completed_steps.append(ProvisioningStep.CHECK_RESOURCE_GROUP)

        start(ProvisioningStep.ENSURE_RESOURCE_GROUP)
        resource_group = self.resource_groups.create_or_reuse(group_name, location)
        outcome.resource_group = resource_group
        outcome.completed_steps.append(ProvisioningStep.ENSURE_RESOURCE_GROUP)
        self.logger.info(f"Creating Resource Group: {resource_group.name}")

        if resource_type not in (ResourceType.STORAGE_ACCOUNT.value, ResourceType.BLOB_CONTAINER.value):
            raise InvalidResourceTypeError(resource_type)

        today = self.today()
        account_name = dated_name(base_name, today)

        start(ProvisioningStep.CHECK_STORAGE_ACCOUNT_NAME)
        availability = self.storage_accounts.check_name_available(account_name)
        outcome.completed_steps.append(ProvisioningStep.CHECK_STORAGE_ACCOUNT_NAME)
        if not availability.available:
            self.logger.warning(f"Storage account already exists duplicate: {availability.message}")
            outcome.status = ProvisioningStatus.WARNED
            outcome.message = DUPLICATE_NAME_WARNING.format(message=availability.message)
            return

        start(ProvisioningStep.CREATE_STORAGE_ACCOUNT)
        account = self.storage_accounts.create(group_name, account_name, location)
        outcome.storage_account = account
        outcome.completed_steps.append(ProvisioningStep.CREATE_STORAGE_ACCOUNT)
        self.logger.info(f"Creating Storage account: {account.name}")

        if resource_type == ResourceType.STORAGE_ACCOUNT.value:
            outcome.status = ProvisioningStatus.COMPLETED
            outcome.message = STORAGE_ACCOUNT_CREATED.format(
                account=account.name, group=resource_group.name
            )
            return

        start(ProvisioningStep.CREATE_BLOB_CONTAINER)
        container_name = dated_name(base_name, today)
        container = self.blob_containers.create(group_name, account_name, container_name)
        outcome.blob_container = container
        outcome.completed_steps.append(ProvisioningStep.CREATE_BLOB_CONTAINER)
        self.logger.info(f"Creating Blob Container: {container.name}")

        outcome.status = ProvisioningStatus.COMPLETED
        outcome.message = BLOB_CONTAINER_CREATED.format(
            container=container.name, account=account.name, group=resource_group.name
        )

