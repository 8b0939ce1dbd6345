from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest

from appliance_logger.core.exceptions import MonitorDecodeError
from appliance_logger.models import Device, DeviceType, FieldDescriptor
from appliance_logger.protocols.base_device_client import DeviceClient, ModelInfo, MonitorHandle
from appliance_logger.services.credential_store import CredentialStore
from appliance_logger.services.influx_service import TimeSeriesSink

BAD_FRAME = b"\xff-garbled"

WASHER = Device("w-1", "Washer", DeviceType.WASHER, "F3U4", "WASHER")
DRYER = Device("d-1", "Dryer", DeviceType.DRYER, "RV09", "DRYER")
FRIDGE = Device("r-1", "Fridge", DeviceType.OTHER, "GBB7", "REFRIGERATOR")

WASHER_DESCRIPTORS = {
    "State": FieldDescriptor.enum({"0": "Off", "2": "Running", "4": "Cooling"}),
    "Remain_Time_H": FieldDescriptor.range(0, 24),
    "APCourse": FieldDescriptor.reference_to("Course"),
    "SmartCourse": FieldDescriptor.reference_to("SmartCourse"),
    "Option1": FieldDescriptor.bitmask({"1": "ChildLock"}),
}


class FakeModel(ModelInfo):

    def __init__(self, descriptors: Optional[Dict[str, FieldDescriptor]] = None,
                 references: Optional[Dict[tuple, str]] = None):
        self.descriptors = descriptors if descriptors is not None else dict(WASHER_DESCRIPTORS)
        self.references = references if references is not None else {("APCourse", "8"): "Cotton"}
        self.decoded: List[Any] = []

    def value(self, key: str) -> FieldDescriptor:
        return self.descriptors.get(key, FieldDescriptor.unknown())

    def reference_name(self, key: str, code: str) -> Optional[str]:
        return self.references.get((key, code))

    def decode_monitor(self, frame: Any) -> Dict[str, Any]:
        if frame == BAD_FRAME:
            raise MonitorDecodeError("bad frame")
        self.decoded.append(frame)
        return dict(frame)


class FakeMonitor(MonitorHandle):
    """Replays ``frames`` from poll(); exceptions in the list are raised."""

    def __init__(self, frames=(), *, start_error: Optional[BaseException] = None,
                 stop_error: Optional[BaseException] = None):
        self.frames = list(frames)
        self.start_error = start_error
        self.stop_error = stop_error
        self.start_calls = 0
        self.poll_calls = 0
        self.stop_calls = 0

    def start(self) -> None:
        self.start_calls += 1
        if self.start_error:
            raise self.start_error

    def poll(self) -> Optional[Any]:
        self.poll_calls += 1
        if not self.frames:
            return None
        item = self.frames.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def stop(self) -> None:
        self.stop_calls += 1
        if self.stop_error:
            raise self.stop_error


class FakeClient(DeviceClient):

    def __init__(self, devices: List[Device], *, authorized: bool = True,
                 models: Optional[Dict[str, ModelInfo]] = None,
                 monitors: Optional[Dict[str, List[FakeMonitor]]] = None,
                 list_errors: Optional[List[BaseException]] = None,
                 state: Optional[Dict[str, Any]] = None):
        self.devices = devices
        self.authorized = authorized
        self.models = models or {}
        self.monitors = monitors or {}
        self.list_errors = list(list_errors or [])
        self.state = state if state is not None else {"auth": {"access_token": "a1"}}
        self.created_monitors: List[FakeMonitor] = []
        self.refresh_calls = 0
        self.list_calls = 0
        self.callback_url: Optional[str] = None

    def is_authorized(self) -> bool:
        return self.authorized

    def list_devices(self) -> List[Device]:
        self.list_calls += 1
        if self.list_errors:
            raise self.list_errors.pop(0)
        return list(self.devices)

    def get_device(self, device_id: str) -> Device:
        return next(d for d in self.devices if d.device_id == device_id)

    def model_info(self, device: Device) -> ModelInfo:
        return self.models.setdefault(device.device_id, FakeModel())

    def refresh_auth(self) -> None:
        self.refresh_calls += 1
        self.state = {"auth": {"access_token": f"a{self.refresh_calls + 1}"}}

    def dump_state(self) -> Dict[str, Any]:
        return dict(self.state)

    def monitor(self, device_id: str) -> MonitorHandle:
        pending = self.monitors.get(device_id)
        assert pending, f"no monitor scripted for {device_id}"
        monitor = pending.pop(0)
        self.created_monitors.append(monitor)
        return monitor

    def oauth_url(self) -> str:
        return "https://example.invalid/login"

    def authorize_from_url(self, callback_url: str) -> None:
        self.callback_url = callback_url
        self.authorized = True


class FakeSink(TimeSeriesSink):

    def __init__(self):
        self.writes: List[list] = []
        self.close_calls = 0

    def write_points(self, points) -> None:
        self.writes.append(list(points))

    def close(self) -> None:
        self.close_calls += 1

    @property
    def points(self) -> list:
        return [p for batch in self.writes for p in batch]


class SinkFactory:

    def __init__(self):
        self.sink = FakeSink()
        self.calls = 0

    def __call__(self) -> FakeSink:
        self.calls += 1
        return self.sink


def as_values(points) -> Dict[str, Any]:
    return {p.series: p.value for p in points}


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def sink_factory() -> SinkFactory:
    return SinkFactory()


@pytest.fixture
def credential_store(tmp_path) -> CredentialStore:
    return CredentialStore(tmp_path / "credentials" / "lg.yaml")


@pytest.fixture
def no_sleep() -> Callable[[float], None]:
    calls: List[float] = []

    def _sleep(seconds: float) -> None:
        calls.append(seconds)

    _sleep.calls = calls  # type: ignore[attr-defined]
    return _sleep
