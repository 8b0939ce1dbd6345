"""Device protocol client interfaces, adapter and monitoring session."""

from .base_device_client import (
    DeviceClient,
    ModelInfo,
    MonitorHandle,
    StatusRecord,
)

from .device_session import DeviceSession, SessionOutcome

__all__ = [
    # Interfaces
    'DeviceClient',
    'ModelInfo',
    'MonitorHandle',
    'StatusRecord',

    # Session
    'DeviceSession',
    'SessionOutcome',
]
