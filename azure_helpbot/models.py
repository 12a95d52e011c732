"""
Data models for Azure resource provisioning requests and responses.
"""

from enum import Enum
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field


def enum_value(value: Any) -> Any:
    """Unwrap SDK enum members into their plain string value."""
    return getattr(value, "value", value)


class ResourceType(str, Enum):
    """Supported Azure resource types."""

    STORAGE_ACCOUNT = "storage-account"
    BLOB_CONTAINER = "blob-container"


class ClientKind(str, Enum):
    """Azure management client handles."""

    RESOURCE_GROUP = "resource-group"
    STORAGE_ACCOUNT = "storage-account"
    BLOB_CONTAINER = "blob-container"


class ProvisioningStatus(str, Enum):
    """Outcome of a provisioning workflow."""

    COMPLETED = "completed"
    WARNED = "warned"
    FAILED = "failed"


class ProvisioningStep(str, Enum):
    """Ordered steps of the provisioning workflow."""

    CHECK_RESOURCE_GROUP = "check_resource_group"
    ENSURE_RESOURCE_GROUP = "ensure_resource_group"
    CHECK_STORAGE_ACCOUNT_NAME = "check_storage_account_name"
    CREATE_STORAGE_ACCOUNT = "create_storage_account"
    CREATE_BLOB_CONTAINER = "create_blob_container"


class Channel(BaseModel):
    """A chat channel that receives broadcast messages."""

    id: str
    name: str


class ResourceGroupInfo(BaseModel):
    """A resource group as reported by Azure."""

    name: str
    location: str
    id: Optional[str] = None
    provisioning_state: Optional[str] = None


class AvailabilityResult(BaseModel):
    """Storage account name availability."""

    available: bool
    message: str = ""
    reason: Optional[str] = None


class AccountInfo(BaseModel):
    """A storage account as reported by Azure."""

    name: str
    location: str
    resource_group: str
    id: Optional[str] = None
    kind: Optional[str] = None
    sku: Optional[str] = None
    access_tier: Optional[str] = None
    provisioning_state: Optional[str] = None


class ContainerInfo(BaseModel):
    """A blob container as reported by Azure."""

    name: str
    storage_account: str
    resource_group: str
    id: Optional[str] = None
    public_access: Optional[str] = None


class ProvisioningOutcome(BaseModel):
    """Result of running the provisioning workflow."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: ProvisioningStatus
    message: str = ""
    resource_group: Optional[ResourceGroupInfo] = None
    storage_account: Optional[AccountInfo] = None
    blob_container: Optional[ContainerInfo] = None
    completed_steps: List[ProvisioningStep] = Field(default_factory=list)
    error: Optional[Exception] = None


class CommandRequest(BaseModel):
    """Parameters of an `azure create` chat command."""

    resource_type: str = ""
    resource_name: str = ""
    location: str = ""


class BotMessage(BaseModel):
    """Message model for bot responses."""

    text: str
    attachments: Optional[List[Dict[str, Any]]] = None
