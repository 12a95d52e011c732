"""
Microsoft Teams bot integration for Azure resource provisioning.
"""

import logging
from typing import List

from botbuilder.core import (
    ActivityHandler, TurnContext, MessageFactory, CardFactory
)
from botbuilder.core.teams import TeamsInfo
from botbuilder.schema import ChannelAccount, ConversationAccount, ConversationReference

from .commands import (
    HELLO_COMMAND, HELP_COMMAND, azure_create, help_message, parse_azure_create
)
from .models import BotMessage, Channel
from .workflow import ProvisioningWorkflow


async def fetch_user_name(turn_context: TurnContext) -> str:
    """Look up the display name of the user who sent the activity."""
    sender = turn_context.activity.from_property
    if sender is None:
        return "Unknown"
    try:
        member = await TeamsInfo.get_member(turn_context, sender.id)
        return member.name or "Unknown"
    except Exception:
        # Outside Teams the roster API is unavailable
        return sender.name or "Unknown"


class AzureHelpBot(ActivityHandler):
    """Teams bot for Azure resource provisioning."""

    def __init__(
        self,
        workflow: ProvisioningWorkflow,
        default_location: str,
        broadcast_channels: List[Channel],
        app_id: str = ""
    ):
        """Initialize the bot."""
        self.workflow = workflow
        self.default_location = default_location
        self.broadcast_channels = broadcast_channels
        self.app_id = app_id
        self.logger = logging.getLogger(__name__)

    async def on_message_activity(self, turn_context: TurnContext):
        """Handle incoming message activities."""
        try:
            text = self._command_text(turn_context)
            user_name = await fetch_user_name(turn_context)

            self.logger.info(f"Received message from {user_name}: {text}")

            request = parse_azure_create(text)
            if request is not None:
                for reply in await azure_create(request, self.workflow, self.default_location):
                    await self._send_response(turn_context, reply)
                return

            command = text.lower()
            if command == HELLO_COMMAND:
                await self._broadcast_hello(turn_context)
            elif command in (HELP_COMMAND, "?"):
                await self._send_response(turn_context, help_message())
            else:
                await self._send_response(
                    turn_context,
                    BotMessage(text=f"Unknown command: {text}. Type 'help' to see what I can do.")
                )

        except Exception as e:
            self.logger.error(f"Error handling message: {e}")
            await turn_context.send_activity(
                MessageFactory.text("Sorry, I encountered an error. Please try again.")
            )

    async def on_members_added_activity(
        self, members_added: List[ChannelAccount], turn_context: TurnContext
    ):
        """Handle when members are added to the conversation."""
        for member in members_added:
            if member.id != turn_context.activity.recipient.id:
                welcome_message = BotMessage(
                    text="Welcome! I can create Azure storage resources for you.\n\n"
                         "Type 'help' to see the supported commands."
                )
                await self._send_response(turn_context, welcome_message)

    @staticmethod
    def _command_text(turn_context: TurnContext) -> str:
        activity = turn_context.activity
        if activity.entities:
            text = TurnContext.remove_recipient_mention(activity)
        else:
            text = activity.text
        return (text or "").strip()

    async def _broadcast_hello(self, turn_context: TurnContext):
        """Post the id of the originating conversation to every broadcast channel."""
        activity = turn_context.activity
        origin = activity.conversation.id

        async def send_origin(channel_context: TurnContext):
            await channel_context.send_activity(MessageFactory.text(origin))

        for channel in self.broadcast_channels:
            reference = ConversationReference(
                bot=activity.recipient,
                channel_id=activity.channel_id,
                service_url=activity.service_url,
                conversation=ConversationAccount(id=channel.id, name=channel.name, is_group=True)
            )
            try:
                await turn_context.adapter.continue_conversation(reference, send_origin, bot_id=self.app_id)
            except Exception as e:
                self.logger.error(f"Failed to post message to channel {channel.name}: {e}")
            else:
                self.logger.info(f"Message successfully sent to channel {channel.name}")

    async def _send_response(self, turn_context: TurnContext, bot_message: BotMessage):
        """Send a response to the user."""
        if not bot_message.attachments:
            await turn_context.send_activity(MessageFactory.text(bot_message.text))
            return

        for attachment in bot_message.attachments:
            if attachment.get("type") == "card":
                card = CardFactory.adaptive_card(attachment["content"])
                await turn_context.send_activity(MessageFactory.attachment(card))
