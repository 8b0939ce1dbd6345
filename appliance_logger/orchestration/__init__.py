# appliance_logger/orchestration/__init__.py
"""Orchestration layer with command pattern and state management."""

from .orchestrator import DataLoggingOrchestrator, OrchestratorConfig, RunSummary
from .state_machine import OrchestrationStateMachine, OrchestrationState
from .commands import (
    OrchestrationCommand,
    DeviceDiscoveryCommand,
    RecordDeviceStatusCommand
)

__all__ = [
    'DataLoggingOrchestrator',
    'OrchestratorConfig',
    'RunSummary',
    'OrchestrationStateMachine',
    'OrchestrationState',
    'OrchestrationCommand',
    'DeviceDiscoveryCommand',
    'RecordDeviceStatusCommand'
]
