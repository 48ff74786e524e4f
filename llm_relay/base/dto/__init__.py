"""Validation DTOs (pydantic) for inbound messages and configuration."""

from .chat import MessageDTO, validate_messages
from .configuration import ConfigurationDTO

__all__ = ["MessageDTO", "validate_messages", "ConfigurationDTO"]
