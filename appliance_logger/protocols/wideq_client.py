"""
LG ThinQ Client Adapter
Implements the device client interfaces on top of the ``wideq`` library.

All ``wideq`` faults are translated here into the project's own exception
taxonomy, so nothing above this module imports ``wideq``.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import wideq

from appliance_logger.core.exceptions import (
    DeviceNotConnectedError,
    MonitorDecodeError,
    NotLoggedInError,
    TransportError,
)
from appliance_logger.models import Device, DeviceType, FieldDescriptor
from appliance_logger.protocols.base_device_client import (
    DeviceClient,
    ModelInfo,
    MonitorHandle,
    StatusRecord,
)

logger = logging.getLogger(__name__)


@contextmanager
def _translate_faults() -> Iterator[None]:
    try:
        yield
    except wideq.NotLoggedInError as e:
        raise NotLoggedInError(str(e)) from e
    except wideq.NotConnectedError as e:
        raise DeviceNotConnectedError(str(e)) from e
    except wideq.APIError as e:
        raise TransportError(str(e)) from e


class WideqModelInfo(ModelInfo):

    def __init__(self, model: Any):
        self._model = model

    def value(self, key: str) -> FieldDescriptor:
        try:
            desc = self._model.value(key)
        except (KeyError, ValueError, AssertionError):
            # wideq rejects value types it does not know
            return FieldDescriptor.unknown()

        if isinstance(desc, wideq.EnumValue):
            return FieldDescriptor.enum(desc.options)
        if isinstance(desc, wideq.RangeValue):
            return FieldDescriptor.range(desc.min, desc.max)
        if isinstance(desc, wideq.ReferenceValue):
            # wideq hands back the table itself; lookups go through reference_name(key)
            return FieldDescriptor.reference_to(key)
        if isinstance(desc, wideq.BitValue):
            return FieldDescriptor.bitmask(desc.options)
        return FieldDescriptor.unknown()

    def reference_name(self, key: str, code: str) -> Optional[str]:
        try:
            return self._model.reference_name(key, code)
        except KeyError:
            return None

    def decode_monitor(self, frame: Any) -> StatusRecord:
        try:
            return dict(self._model.decode_monitor(frame))
        except (wideq.MonitorError, ValueError, KeyError, TypeError) as e:
            raise MonitorDecodeError(f"undecodable monitor frame: {e}") from e


class WideqMonitor(MonitorHandle):

    def __init__(self, monitor: Any):
        self._monitor = monitor

    def start(self) -> None:
        with _translate_faults():
            self._monitor.start()

    def poll(self) -> Optional[Any]:
        with _translate_faults():
            return self._monitor.poll()

    def stop(self) -> None:
        with _translate_faults():
            self._monitor.stop()


class WideqDeviceClient(DeviceClient):
    """Adapter around ``wideq.Client``, loaded from a credential blob."""

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    def load(cls, state: Dict[str, Any]) -> "WideqDeviceClient":
        return cls(wideq.Client.load(state))

    def is_authorized(self) -> bool:
        return self._client._auth is not None

    def list_devices(self) -> List[Device]:
        with _translate_faults():
            return [self._to_device(info) for info in self._client.devices]

    def get_device(self, device_id: str) -> Device:
        return self._to_device(self._device_info(device_id))

    def model_info(self, device: Device) -> ModelInfo:
        info = self._device_info(device.device_id)
        with _translate_faults():
            return WideqModelInfo(self._client.model_info(info))

    def refresh_auth(self) -> None:
        logger.info("session expired, refreshing")
        with _translate_faults():
            self._client.refresh()

    def dump_state(self) -> Dict[str, Any]:
        return self._client.dump()

    def monitor(self, device_id: str) -> MonitorHandle:
        with _translate_faults():
            return WideqMonitor(wideq.Monitor(self._client.session, device_id))

    def oauth_url(self) -> str:
        with _translate_faults():
            return self._client.gateway.oauth_url()

    def authorize_from_url(self, callback_url: str) -> None:
        with _translate_faults():
            self._client._auth = wideq.Auth.from_url(self._client.gateway, callback_url)

    # ---- helpers ----
    def _device_info(self, device_id: str) -> Any:
        with _translate_faults():
            info = self._client.get_device(device_id)
        if info is None:
            raise KeyError(f"unknown device id: {device_id}")
        return info

    @staticmethod
    def _to_device(info: Any) -> Device:
        return Device.from_row({
            "device_id": info.id,
            "name":      info.name,
            "type":      info.type.name,
            "model_id":  info.model_id,
        })
