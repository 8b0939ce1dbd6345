"""
Centralised exception definitions for the appliance status logger.
All custom exceptions should inherit from ApplianceLoggerError.
"""

class ApplianceLoggerError(Exception):
    """Base class for every custom exception thrown by this project."""

class ConfigurationError(ApplianceLoggerError):
    """Raised when configuration files or environment variables are invalid."""

class ProtocolError(ApplianceLoggerError):
    """Generic failure inside the device-protocol client."""

class NotLoggedInError(ProtocolError):
    """The client holds no authorization, or the session has expired."""

class DeviceNotConnectedError(ProtocolError):
    """The appliance is powered off or unreachable from the cloud service."""

class MonitorDecodeError(ProtocolError):
    """A monitor frame could not be decoded into a status record."""

class MonitorTimeoutError(ProtocolError):
    """The poll ceiling was reached before any status frame arrived."""

class TransportError(ProtocolError):
    """Network-level failure talking to the device service."""

class SinkError(ApplianceLoggerError):
    """Raised when points cannot be written to the time-series database."""
