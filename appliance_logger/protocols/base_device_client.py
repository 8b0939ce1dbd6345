"""
Device Protocol Client Interfaces
Abstract seams between the status logger and the appliance cloud client.

The logger never speaks the device wire protocol itself. Everything it needs
from the vendor client goes through the three interfaces below, which keeps
the polling/retry logic testable with in-memory doubles.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from appliance_logger.models import Device, FieldDescriptor

StatusRecord = Dict[str, Any]


class ModelInfo(ABC):
    """Per-model descriptor table plus the frame decoder for that model."""

    @abstractmethod
    def value(self, key: str) -> FieldDescriptor:
        """Return the declared descriptor of status field ``key``."""
        pass

    @abstractmethod
    def reference_name(self, key: str, code: str) -> Optional[str]:
        """Resolve a reference field code to its display name, or None."""
        pass

    @abstractmethod
    def decode_monitor(self, frame: Any) -> StatusRecord:
        """Decode one raw monitor frame; raises MonitorDecodeError if malformed."""
        pass


class MonitorHandle(ABC):
    """A monitoring session on one device: start once, poll, stop once."""

    @abstractmethod
    def start(self) -> None:
        """Begin monitoring; raises DeviceNotConnectedError when offline."""
        pass

    @abstractmethod
    def poll(self) -> Optional[Any]:
        """Return the latest raw frame, or None when nothing is ready yet."""
        pass

    @abstractmethod
    def stop(self) -> None:
        pass


class DeviceClient(ABC):
    """Authorized session with the appliance cloud service."""

    @abstractmethod
    def is_authorized(self) -> bool:
        pass

    @abstractmethod
    def list_devices(self) -> List[Device]:
        pass

    @abstractmethod
    def get_device(self, device_id: str) -> Device:
        pass

    @abstractmethod
    def model_info(self, device: Device) -> ModelInfo:
        pass

    @abstractmethod
    def refresh_auth(self) -> None:
        """Renew an expired session using the stored refresh token."""
        pass

    @abstractmethod
    def dump_state(self) -> Dict[str, Any]:
        """Serializable authorization + cache state for the credential store."""
        pass

    @abstractmethod
    def monitor(self, device_id: str) -> MonitorHandle:
        """Create (but do not start) a monitor for ``device_id``."""
        pass

    @abstractmethod
    def oauth_url(self) -> str:
        pass

    @abstractmethod
    def authorize_from_url(self, callback_url: str) -> None:
        """Complete the OAuth handshake from the browser's redirect URL."""
        pass
