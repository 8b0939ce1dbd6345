from .retry import RetryPolicy, run_with_retry, TRANSIENT_FAULTS, DEFAULT_MAX_RETRIES
from .state_machine import StateMachine, MonitorState

__all__ = [
    "RetryPolicy",
    "run_with_retry",
    "TRANSIENT_FAULTS",
    "DEFAULT_MAX_RETRIES",
    "StateMachine",
    "MonitorState",
]
