import logging
from enum import Enum, auto
from typing import Dict, List

class MonitorState(Enum):
    CREATED  = auto()
    STARTED  = auto()
    POLLING  = auto()
    STOPPED  = auto()

class StateMachine:
    def __init__(self, initial: MonitorState = MonitorState.CREATED):
        self._state = initial
        self.log = logging.getLogger(self.__class__.__name__)
        self._trans: Dict[MonitorState, List[MonitorState]] = {
            MonitorState.CREATED: [MonitorState.STARTED, MonitorState.STOPPED],
            MonitorState.STARTED: [MonitorState.POLLING, MonitorState.STOPPED],
            MonitorState.POLLING: [MonitorState.POLLING, MonitorState.STOPPED],
            MonitorState.STOPPED: [],
        }

    @property
    def state(self) -> MonitorState: return self._state

    def can(self, nxt: MonitorState) -> bool: return nxt in self._trans[self._state]

    def transition(self, nxt: MonitorState) -> bool:
        if self.can(nxt):
            self._state = nxt
            return True
        self.log.warning("refused monitor transition %s -> %s", self._state.name, nxt.name)
        return False
