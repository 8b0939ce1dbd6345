# appliance_logger/core/__init__.py
"""Core infrastructure components for the appliance status logger."""

# Import order: most fundamental to most specific

from .exceptions import (
    ApplianceLoggerError,
    ConfigurationError,
    ProtocolError,
    NotLoggedInError,
    DeviceNotConnectedError,
    MonitorDecodeError,
    MonitorTimeoutError,
    TransportError,
    SinkError,
)

from .patterns.state_machine import StateMachine, MonitorState
from .patterns.retry import RetryPolicy, run_with_retry, TRANSIENT_FAULTS


__all__ = [
    "StateMachine",
    "MonitorState",
    "RetryPolicy",
    "run_with_retry",
    "TRANSIENT_FAULTS",
    "ApplianceLoggerError",
    "ConfigurationError",
    "ProtocolError",
    "NotLoggedInError",
    "DeviceNotConnectedError",
    "MonitorDecodeError",
    "MonitorTimeoutError",
    "TransportError",
    "SinkError",
]
