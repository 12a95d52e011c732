"""
Azure Help Bot

A chat-driven operations assistant that provisions Azure storage resources
(resource group, storage account, blob container) on request from a chat
channel.
"""

__version__ = "1.0.0"
__author__ = "Azure Help Bot Team"
