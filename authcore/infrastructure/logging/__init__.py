"""Logging adapters implementing LoggerProtocol."""

from authcore.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
