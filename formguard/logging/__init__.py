"""Security logging module."""

from .security_logger import SecurityLogger, SecurityEvent, SecurityEventType

__all__ = ["SecurityLogger", "SecurityEvent", "SecurityEventType"]
