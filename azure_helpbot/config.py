"""
Configuration management for the Azure Help Bot.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import Channel


class AzureConfig(BaseSettings):
    """Azure-specific configuration settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    subscription_id: str = Field(..., validation_alias="AZURE_SUBSCRIPTION_ID")
    default_location: str = Field("eastus", validation_alias="DEFAULT_LOCATION")


class BotConfig(BaseSettings):
    """Bot Framework configuration settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_id: str = Field("", validation_alias="BOT_APP_ID")
    app_password: str = Field("", validation_alias="BOT_APP_PASSWORD")
    port: int = Field(3978, validation_alias="BOT_PORT")


class ChannelConfig(BaseSettings):
    """Channels that receive broadcast messages."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    broadcast_channels: str = Field("", validation_alias="BROADCAST_CHANNELS")

    @property
    def channel_list(self) -> List[Channel]:
        """Parse comma-separated "id:name" pairs."""
        channels = []
        for entry in self.broadcast_channels.split(","):
            entry = entry.strip()
            if not entry:
                continue
            channel_id, _, name = entry.partition(":")
            channels.append(Channel(id=channel_id.strip(), name=name.strip() or channel_id.strip()))
        return channels


class MonitoringConfig(BaseSettings):
    """Monitoring and logging configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class Config(BaseSettings):
    """Main configuration class that combines all settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    azure: AzureConfig = Field(default_factory=AzureConfig)
    bot: BotConfig = Field(default_factory=BotConfig)
    channels: ChannelConfig = Field(default_factory=ChannelConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)


def load_config() -> Config:
    """Load the configuration once at process start."""
    return Config()
