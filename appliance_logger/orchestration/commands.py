from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, TypeVar
import logging

from appliance_logger.core.exceptions import NotLoggedInError
from appliance_logger.protocols.device_session import DeviceSession
from appliance_logger.services.series_emitter import SeriesEmitter

T = TypeVar("T")


class OrchestrationCommand(ABC):
    """Base class for orchestration commands"""
    
    def __init__(self, context: Dict[str, Any]):
        self.context = context
        parent = context.get("logger")
        self.logger = (parent.getChild(self.__class__.__name__) if parent
                       else logging.getLogger(self.__class__.__name__))
    
    @abstractmethod
    def execute(self) -> Dict[str, Any]:
        """Execute the command and return results"""
        pass

    def _refreshing(self, call: Callable[[], T]) -> T:
        """Run ``call``; on an expired session refresh it and re-raise for retry."""
        try:
            return call()
        except NotLoggedInError:
            self.logger.info("Session expired, refreshing")
            self.context["client"].refresh_auth()
            self.context["refreshed"] = True
            raise


class DeviceDiscoveryCommand(OrchestrationCommand):
    """Command to fetch the device list from the appliance cloud"""
    
    def execute(self) -> Dict[str, Any]:
        client = self.context["client"]
        retry = self.context["retry"].including(NotLoggedInError)
        
        try:
            devices = retry(lambda attempt: self._refreshing(client.list_devices))
        except Exception as e:
            self.logger.error(f"Device discovery failed: {e}", exc_info=True)
            return {"success": False, "error": str(e), "devices": []}
        
        for device in devices:
            self.logger.info(f'{device.device_id}: "{device.name}" '
                             f'(type {device.type_name or device.type.name}, id {device.model_id})')
        self.logger.info(f"Discovered {len(devices)} devices")
        
        return {
            "devices": devices,
            "success": True
        }


class RecordDeviceStatusCommand(OrchestrationCommand):
    """Command to take one status snapshot of a device and record it"""
    
    def execute(self) -> Dict[str, Any]:
        device = self.context["device"]
        client = self.context["client"]
        retry = self.context["retry"].including(NotLoggedInError)
        
        try:
            model = retry(lambda attempt: self._refreshing(lambda: client.model_info(device)))
            return retry(lambda attempt: self._refreshing(lambda: self._record(device, model, attempt)))
        except Exception as e:
            self.logger.error(f"Recording status of {device.name} failed: {e}", exc_info=True)
            return {"success": False, "error": str(e)}
    
    def _record(self, device, model, attempt: int) -> Dict[str, Any]:
        config = self.context["config"]
        if attempt:
            self.logger.info(f"Monitoring {device.name}, attempt {attempt + 1}")
        
        # fresh sink connection per cycle; none at all in a dry run
        sink = None if config.dry_run else self.context["sink_factory"]()
        try:
            emitter = SeriesEmitter(sink, dry_run=config.dry_run)

            session = DeviceSession(
                self.context["client"], device, model,
                poll_interval=config.poll_interval,
                max_polls=config.max_polls,
                sleep=self.context["sleep"],
                clock=self.context["clock"],
            )
            outcome = session.snapshot()

            if outcome.online:
                points = emitter.emit_snapshot(device, outcome.fields, outcome.timestamp)
            else:
                points = emitter.emit_offline(device, outcome.timestamp)
        finally:
            if sink is not None:
                sink.close()

        return {
            "success": True,
            "online": outcome.online,
            "points": points
        }
