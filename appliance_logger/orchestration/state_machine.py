from enum import Enum, auto
import logging

class OrchestrationState(Enum):
    INITIALIZING = auto()
    LOADING_CREDENTIALS = auto()
    DEVICE_DISCOVERY = auto()
    RECORDING = auto()
    COMPLETED = auto()
    FAILED = auto()

class OrchestrationStateMachine:
    """Tracks progress of one recording pass"""
    
    def __init__(self):
        self.current_state = OrchestrationState.INITIALIZING
        self.logger = logging.getLogger(self.__class__.__name__)
        self.valid_transitions = {
            OrchestrationState.INITIALIZING: {OrchestrationState.LOADING_CREDENTIALS},
            OrchestrationState.LOADING_CREDENTIALS: {OrchestrationState.DEVICE_DISCOVERY, OrchestrationState.FAILED},
            OrchestrationState.DEVICE_DISCOVERY: {OrchestrationState.RECORDING, OrchestrationState.COMPLETED, OrchestrationState.FAILED},
            OrchestrationState.RECORDING: {OrchestrationState.COMPLETED, OrchestrationState.FAILED},
            OrchestrationState.COMPLETED: set(),
            OrchestrationState.FAILED: set()
        }
    
    def can_transition_to(self, new_state: OrchestrationState) -> bool:
        return new_state in self.valid_transitions.get(self.current_state, set())
    
    def transition_to(self, new_state: OrchestrationState) -> bool:
        if self.can_transition_to(new_state):
            self.logger.info(f"State transition: {self.current_state.name} -> {new_state.name}")
            self.current_state = new_state
            return True
        else:
            self.logger.error(f"Invalid state transition: {self.current_state.name} -> {new_state.name}")
            return False
