"""Chat channels."""

from docbot.channels.telegram import TelegramChannel

__all__ = ["TelegramChannel"]
