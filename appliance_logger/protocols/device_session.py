"""
Single-device monitoring session.

Drives one monitor through ``CREATED → STARTED → POLLING → STOPPED`` and
returns the first decodable status snapshot, or an offline outcome when the
appliance is not connected. The monitor is always stopped, whatever happens
in between.
"""

from __future__ import annotations
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from appliance_logger.core.exceptions import (
    DeviceNotConnectedError,
    MonitorDecodeError,
    MonitorTimeoutError,
)
from appliance_logger.core.patterns.state_machine import MonitorState, StateMachine
from appliance_logger.mapping import ValueDecoder
from appliance_logger.models import Device, RenderedField
from appliance_logger.protocols.base_device_client import DeviceClient, ModelInfo, MonitorHandle


@dataclass(frozen=True)
class SessionOutcome:
    online: bool
    timestamp: int
    fields: List[RenderedField] = field(default_factory=list)


class DeviceSession:

    def __init__(self,
                 client: DeviceClient,
                 device: Device,
                 model: ModelInfo,
                 decoder: Optional[ValueDecoder] = None,
                 *,
                 poll_interval: float = 1.0,
                 max_polls: int = 0,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.time):
        self.client = client
        self.device = device
        self.model = model
        self.decoder = decoder or ValueDecoder()
        self.poll_interval = poll_interval
        self.max_polls = max_polls            # 0 = poll until a snapshot arrives
        self.sleep = sleep
        self.clock = clock
        self.machine: Optional[StateMachine] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def state(self) -> Optional[MonitorState]:
        return self.machine.state if self.machine else None

    def snapshot(self) -> SessionOutcome:
        """Start a monitor, poll until one status frame decodes, stop it."""
        with self._monitor() as monitor:
            try:
                monitor.start()
            except DeviceNotConnectedError:
                return self._offline()
            self.machine.transition(MonitorState.STARTED)

            try:
                return self._poll_until_snapshot(monitor)
            except DeviceNotConnectedError:
                return self._offline()
            except Exception as e:
                self.logger.error("monitoring %s failed: %s", self.device.name, e)
                raise

    @contextmanager
    def _monitor(self) -> Iterator[MonitorHandle]:
        monitor = self.client.monitor(self.device.device_id)
        self.machine = StateMachine(MonitorState.CREATED)
        try:
            yield monitor
        finally:
            self.machine.transition(MonitorState.STOPPED)
            try:
                monitor.stop()
            except Exception as e:
                self.logger.error("error stopping monitor for %s: %s", self.device.name, e)

    def _poll_until_snapshot(self, monitor: MonitorHandle) -> SessionOutcome:
        polls = 0
        while True:
            if self.max_polls and polls >= self.max_polls:
                raise MonitorTimeoutError(
                    f"no status from {self.device.name} after {polls} polls")

            self.sleep(self.poll_interval)
            self.logger.info("polling %s...", self.device.name)
            self.machine.transition(MonitorState.POLLING)
            frame = monitor.poll()
            polls += 1
            if not frame:
                continue

            timestamp = int(self.clock())
            try:
                fields = self.decoder.decode(self.model, frame)
            except MonitorDecodeError as e:
                self.logger.warning("error decoding monitor frame from %s: %s", self.device.name, e)
                continue
            if not fields:
                continue
            return SessionOutcome(online=True, timestamp=timestamp, fields=fields)

    def _offline(self) -> SessionOutcome:
        self.logger.info("%s is not connected", self.device.name)
        return SessionOutcome(online=False, timestamp=int(self.clock()))
