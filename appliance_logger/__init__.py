"""Appliance Status Logger - Main Package"""

__version__ = '1.0.0'
__description__ = 'Records appliance status snapshots as time-series points'

# Core patterns - most fundamental
from .core import RetryPolicy, StateMachine, run_with_retry

# Models - domain objects
from .models import Device, DeviceType, FieldDescriptor, RenderedField, SeriesPoint

# Decoding
from .mapping import ValueDecoder

# Protocols
from .protocols import DeviceClient, DeviceSession

# Services
from .services import CredentialStore, InfluxService, SeriesEmitter

# Orchestration
from .orchestration import DataLoggingOrchestrator, OrchestratorConfig

__all__ = [
    # Core
    'RetryPolicy',
    'StateMachine',
    'run_with_retry',

    # Models
    'Device',
    'DeviceType',
    'FieldDescriptor',
    'RenderedField',
    'SeriesPoint',

    # Decoding / protocols
    'ValueDecoder',
    'DeviceClient',
    'DeviceSession',

    # Services
    'CredentialStore',
    'InfluxService',
    'SeriesEmitter',
    'DataLoggingOrchestrator',
    'OrchestratorConfig',
]
