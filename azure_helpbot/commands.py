"""
Chat commands understood by the bot.
"""

import asyncio
import functools
import logging
import threading
from typing import Any, Dict, List, Optional

from .errors import MissingParametersError
from .models import BotMessage, CommandRequest
from .workflow import ProvisioningWorkflow

logger = logging.getLogger(__name__)

AZURE_CREATE_PREFIX = ("azure", "create")
AZURE_CREATE_USAGE = "azure create {resource-type} {resource-name} {location}"
AZURE_CREATE_DESCRIPTION = "Create new Azure Resource"
AZURE_CREATE_EXAMPLES = [
    "Supported resources:",
    "azure create blob-container mysampleblob eastus",
    "azure create storage-account mysamplestorage westus",
]

HELLO_COMMAND = "hello"
HELP_COMMAND = "help"


def parse_azure_create(text: str) -> Optional[CommandRequest]:
    """
    Parse an `azure create` command.

    Returns None when the text is not an `azure create` command. Missing
    trailing parameters are left empty.
    """
    tokens = (text or "").split()
    if tuple(token.lower() for token in tokens[:2]) != AZURE_CREATE_PREFIX:
        return None

    params = tokens[2:5] + [""] * (3 - len(tokens[2:5]))
    return CommandRequest(
        resource_type=params[0],
        resource_name=params[1],
        location=params[2]
    )


def validate_request(request: CommandRequest) -> None:
    """Raise MissingParametersError unless both type and name are present."""
    if not request.resource_type or not request.resource_name:
        raise MissingParametersError()


def result_card(message: str) -> Dict[str, Any]:
    """Wrap a message between two separators in an Adaptive Card."""
    return {
        "type": "AdaptiveCard",
        "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
        "version": "1.4",
        "body": [
            {"type": "Container", "separator": True, "items": []},
            {"type": "TextBlock", "text": message, "wrap": True},
            {"type": "Container", "separator": True, "items": []},
        ],
    }


def result_message(message: str) -> BotMessage:
    return BotMessage(
        text=message,
        attachments=[{"type": "card", "content": result_card(message)}]
    )


def help_message() -> BotMessage:
    lines = [
        f"**{AZURE_CREATE_USAGE}**",
        AZURE_CREATE_DESCRIPTION,
        *AZURE_CREATE_EXAMPLES,
        f"**{HELLO_COMMAND}** - announce this conversation in the broadcast channels",
        f"**{HELP_COMMAND}** - show this message",
    ]
    return BotMessage(text="\n\n".join(lines))


async def azure_create(request: CommandRequest, workflow: ProvisioningWorkflow, default_location: str) -> List[BotMessage]:
    """
    Run the provisioning workflow for an `azure create` command.

    Args:
        request: The parsed command
        workflow: Workflow wired to the Azure clients
        default_location: Region reported to the user when none is given

    Returns:
        List[BotMessage]: Replies to post, in order
    """
    try:
        validate_request(request)
    except MissingParametersError as e:
        return [BotMessage(text=f":x: {e}")]

    replies = []
    if not request.location:
        replies.append(BotMessage(text=f":information_source: Location will default to {default_location}"))

    # The Azure SDK calls block, so keep them off the event loop
    loop = asyncio.get_running_loop()
    cancelled = threading.Event()
    run = functools.partial(
        workflow.run, request.resource_name, request.resource_type, request.location, cancel_event=cancelled
    )
    try:
        result = await loop.run_in_executor(None, run)
    except asyncio.CancelledError:
        # Stop the worker thread before it starts another provisioning step
        cancelled.set()
        logger.warning(f"Cancelled creating {request.resource_type} '{request.resource_name}'")
        raise
    except Exception as e:
        replies.append(BotMessage(text=f":x: Error creating resource {e}"))
        return replies

    replies.append(result_message(result))
    return replies
