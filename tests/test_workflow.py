import threading
from types import SimpleNamespace

import pytest
from azure.core.exceptions import HttpResponseError

from azure_helpbot.errors import InvalidResourceTypeError, ProvisioningCancelledError
from azure_helpbot.models import ProvisioningStatus, ProvisioningStep

from .conftest import fake_resource_group


def test_storage_account_scenario(workflow, resource_client, storage_client):
    message = workflow.run("foo", "storage-account", "")

    assert message == (
        ":white_check_mark: Storage account 'foo010624' created successfully in resource group 'foo-rg'"
    )
    resource_client.resource_groups.create_or_update.assert_called_once_with("foo-rg", {"location": "eastus"})
    params = storage_client.storage_accounts.begin_create.call_args.args[2]
    assert storage_client.storage_accounts.begin_create.call_args.args[:2] == ("foo-rg", "foo010624")
    assert params["access_tier"] == "Cool"
    storage_client.blob_containers.create.assert_not_called()


def test_existence_check_does_not_skip_create(workflow, resource_client):
    resource_client.resource_groups.check_existence.return_value = True

    workflow.run("foo", "storage-account", "westus")

    resource_client.resource_groups.check_existence.assert_called_once_with("foo-rg")
    resource_client.resource_groups.create_or_update.assert_called_once_with("foo-rg", {"location": "westus"})


def test_duplicate_name_returns_warning(workflow, storage_client):
    storage_client.storage_accounts.check_name_availability.return_value = SimpleNamespace(
        name_available=False, reason="AlreadyExists", message="Storage account name already taken"
    )

    message = workflow.run("foo", "storage-account", "")

    assert message == ":warning: Storage account name already taken"
    storage_client.storage_accounts.begin_create.assert_not_called()
    storage_client.blob_containers.create.assert_not_called()


def test_duplicate_name_is_a_warned_outcome(workflow, storage_client):
    storage_client.storage_accounts.check_name_availability.return_value = SimpleNamespace(
        name_available=False, reason="AlreadyExists", message="Storage account name already taken"
    )

    outcome = workflow.execute("foo", "blob-container", "")

    assert outcome.status == ProvisioningStatus.WARNED
    assert outcome.error is None
    assert outcome.storage_account is None
    assert outcome.completed_steps[-1] == ProvisioningStep.CHECK_STORAGE_ACCOUNT_NAME


def test_blob_container_scenario(workflow, storage_client):
    message = workflow.run("foo", "blob-container", "")

    assert message == (
        ":white_check_mark: Blob Container 'foo010624' and Storage account 'foo010624' "
        "created successfully in resource group 'foo-rg'"
    )
    storage_client.blob_containers.create.assert_called_once_with(
        "foo-rg", "foo010624", "foo010624", {"public_access": "None"}
    )


def test_blob_container_outcome_records_every_step(workflow):
    outcome = workflow.execute("foo", "blob-container", "westeurope")

    assert outcome.status == ProvisioningStatus.COMPLETED
    assert outcome.completed_steps == list(ProvisioningStep)
    assert outcome.resource_group.location == "westeurope"
    assert outcome.storage_account.name == "foo010624"
    assert outcome.blob_container.name == "foo010624"


def test_unknown_resource_type_still_creates_resource_group(workflow, resource_client, storage_client):
    # The resource group is ensured before the type is validated.
    with pytest.raises(InvalidResourceTypeError) as exc_info:
        workflow.run("foo", "unknown", "")

    assert str(exc_info.value).startswith("invalid resource type: unknown.")
    resource_client.resource_groups.create_or_update.assert_called_once_with("foo-rg", {"location": "eastus"})
    storage_client.storage_accounts.check_name_availability.assert_not_called()
    storage_client.storage_accounts.begin_create.assert_not_called()


def test_resource_group_failure_aborts(workflow, resource_client, storage_client):
    resource_client.resource_groups.create_or_update.side_effect = HttpResponseError(message="quota exceeded")

    outcome = workflow.execute("foo", "storage-account", "")

    assert outcome.status == ProvisioningStatus.FAILED
    assert isinstance(outcome.error, HttpResponseError)
    assert outcome.completed_steps == [ProvisioningStep.CHECK_RESOURCE_GROUP]
    storage_client.storage_accounts.check_name_availability.assert_not_called()


def test_container_failure_leaves_account_in_place(workflow, storage_client):
    storage_client.blob_containers.create.side_effect = HttpResponseError(message="container failed")

    with pytest.raises(HttpResponseError):
        workflow.run("foo", "blob-container", "")

    storage_client.storage_accounts.begin_create.assert_called_once()
    storage_client.storage_accounts.delete.assert_not_called()


def test_cancel_event_stops_before_next_step(workflow, resource_client, storage_client):
    cancelled = threading.Event()

    def cancel_while_creating_group(name, params):
        cancelled.set()
        return fake_resource_group(name, params["location"])

    resource_client.resource_groups.create_or_update.side_effect = cancel_while_creating_group

    outcome = workflow.execute("foo", "storage-account", "", cancel_event=cancelled)

    assert outcome.status == ProvisioningStatus.FAILED
    assert isinstance(outcome.error, ProvisioningCancelledError)
    assert outcome.error.step == ProvisioningStep.CHECK_STORAGE_ACCOUNT_NAME
    assert outcome.completed_steps == [
        ProvisioningStep.CHECK_RESOURCE_GROUP, ProvisioningStep.ENSURE_RESOURCE_GROUP
    ]
    storage_client.storage_accounts.check_name_availability.assert_not_called()


def test_cancelled_run_raises(workflow, resource_client):
    cancelled = threading.Event()
    cancelled.set()

    with pytest.raises(ProvisioningCancelledError):
        workflow.run("foo", "storage-account", "", cancel_event=cancelled)

    resource_client.resource_groups.check_existence.assert_not_called()
