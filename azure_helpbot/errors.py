"""
Exceptions raised by the Azure Help Bot.
"""


class HelpBotError(Exception):
    """Base class for errors raised by this package."""


class MissingParametersError(HelpBotError):
    """A chat command was issued without its required parameters."""

    def __init__(self, message: str = "Missing required parameters. Please provide 'resource-type', 'resource-name'"):
        super().__init__(message)


class InvalidLocationError(HelpBotError):
    """Azure rejected the location for a resource group."""

    def __init__(self, error_code: str):
        self.error_code = error_code
        super().__init__(f"enter valid location: {error_code}")


class InvalidResourceTypeError(HelpBotError):
    """The requested resource type is not supported."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(
            f"invalid resource type: {resource_type}. "
            "Valid types are 'blob-container' or 'storage-account'"
        )


class ClientConstructionError(HelpBotError):
    """An Azure management client could not be built."""


class ProvisioningCancelledError(HelpBotError):
    """The command was cancelled before the next provisioning step started."""

    def __init__(self, step):
        self.step = step
        super().__init__(f"provisioning cancelled before step {step.value}")
