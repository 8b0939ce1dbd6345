from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import logging
import time

from appliance_logger.core.exceptions import NotLoggedInError
from appliance_logger.core.patterns.retry import RetryPolicy, DEFAULT_MAX_RETRIES
from appliance_logger.models import Device
from appliance_logger.protocols.base_device_client import DeviceClient
from appliance_logger.services.credential_store import CredentialStore
from appliance_logger.services.influx_service import TimeSeriesSink
from .state_machine import OrchestrationStateMachine, OrchestrationState
from .commands import DeviceDiscoveryCommand, RecordDeviceStatusCommand


@dataclass(frozen=True)
class OrchestratorConfig:
    dry_run: bool = False
    max_retries: int = DEFAULT_MAX_RETRIES
    poll_interval: float = 1.0
    max_polls: int = 0


@dataclass
class RunSummary:
    online: List[str] = field(default_factory=list)
    offline: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    discovery_error: Optional[str] = None


class DataLoggingOrchestrator:
    """Records one status snapshot per known device.

    Loads the stored credentials, lists devices, then drives each device
    through a monitoring session and series emission. A failing device is
    logged and skipped; only a missing authorization aborts the run.
    """
    
    def __init__(self,
                 credential_store: CredentialStore,
                 client_loader: Callable[[Dict[str, Any]], DeviceClient],
                 sink_factory: Callable[[], TimeSeriesSink],
                 config: Optional[OrchestratorConfig] = None,
                 *,
                 logger: Optional[logging.Logger] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.time):
        self.credential_store = credential_store
        self.client_loader = client_loader
        self.config = config or OrchestratorConfig()
        self.state_machine = OrchestrationStateMachine()
        self.context: Dict[str, Any] = {
            "config": self.config,
            "retry": RetryPolicy(max_retries=self.config.max_retries),
            "sink_factory": sink_factory,
            "sleep": sleep,
            "clock": clock,
            "refreshed": False,
        }
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.context["logger"] = self.logger
    
    def connect(self) -> DeviceClient:
        """Build the client from stored credentials; fail fast without authorization."""
        self.state_machine.transition_to(OrchestrationState.LOADING_CREDENTIALS)
        state = self.credential_store.load()
        client = self.client_loader(state)
        if not client.is_authorized():
            self.state_machine.transition_to(OrchestrationState.FAILED)
            raise NotLoggedInError("no stored authorization, run `authorize` first")
        self.context["client"] = client
        return client
    
    def discover(self) -> List[Device]:
        """List devices (refreshing an expired session) and persist the client state."""
        self.state_machine.transition_to(OrchestrationState.DEVICE_DISCOVERY)
        result = DeviceDiscoveryCommand(self.context).execute()
        self.context["discovery_error"] = result.get("error")
        if result["success"] or self.context["refreshed"]:
            self._persist()
        return result["devices"]
    
    def run(self) -> RunSummary:
        """Execute one full recording pass"""
        self.connect()
        devices = self.discover()
        summary = RunSummary(discovery_error=self.context["discovery_error"])
        
        self.state_machine.transition_to(OrchestrationState.RECORDING)
        for device in devices:
            self.context["device"] = device
            result = RecordDeviceStatusCommand(self.context).execute()
            if not result["success"]:
                summary.failed[device.device_id] = result["error"]
            elif result["online"]:
                summary.online.append(device.device_id)
            else:
                summary.offline.append(device.device_id)
        
        if self.context["refreshed"]:
            self._persist()
        
        self.state_machine.transition_to(OrchestrationState.COMPLETED)
        self.logger.info(f"Recorded {len(summary.online)} online, {len(summary.offline)} offline, "
                         f"{len(summary.failed)} failed")
        return summary
    
    def _persist(self):
        self.credential_store.save(self.context["client"].dump_state())
        self.context["refreshed"] = False
