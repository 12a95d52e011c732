"""
HTTP host for the bot: receives Bot Framework activities on /api/messages.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from botbuilder.core import BotFrameworkAdapter, BotFrameworkAdapterSettings, TurnContext
from botbuilder.schema import Activity
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from .bot import AzureHelpBot
from .clients import AzureClients, create_clients
from .config import Config, load_config
from .workflow import ProvisioningWorkflow

logger = logging.getLogger(__name__)


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.monitoring.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_adapter(config: Config) -> BotFrameworkAdapter:
    adapter = BotFrameworkAdapter(
        BotFrameworkAdapterSettings(config.bot.app_id, config.bot.app_password)
    )

    async def on_error(context: TurnContext, error: Exception):
        logger.error(f"Unhandled error in turn: {error}")
        await context.send_activity("Sorry, I encountered an error. Please try again.")

    adapter.on_turn_error = on_error
    return adapter


def create_app(
    bot: AzureHelpBot,
    adapter: BotFrameworkAdapter,
    clients: Optional[AzureClients] = None
) -> FastAPI:
    """Build the FastAPI application that forwards activities to the bot.

    The Azure clients, when given, are closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if clients is not None:
            clients.close()

    app = FastAPI(title="Azure Help Bot", version="1.0.0", lifespan=lifespan)

    @app.post("/api/messages")
    async def messages(request: Request):
        if "application/json" not in request.headers.get("Content-Type", ""):
            return Response(status_code=415)

        body = await request.json()
        activity = Activity().deserialize(body)
        auth_header = request.headers.get("Authorization", "")

        response = await adapter.process_activity(activity, auth_header, bot.on_turn)
        if response:
            return JSONResponse(content=response.body, status_code=response.status)
        return Response(status_code=201)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


def build_app(config: Config) -> FastAPI:
    """Wire clients, workflow, bot and adapter from configuration."""
    clients = create_clients(config.azure)
    workflow = ProvisioningWorkflow.from_clients(clients, config.azure.default_location)
    bot = AzureHelpBot(
        workflow,
        default_location=config.azure.default_location,
        broadcast_channels=config.channels.channel_list,
        app_id=config.bot.app_id
    )
    return create_app(bot, create_adapter(config), clients)


def main():
    config = load_config()
    configure_logging(config)
    app = build_app(config)
    uvicorn.run(app, host="0.0.0.0", port=config.bot.port)


if __name__ == "__main__":
    main()
