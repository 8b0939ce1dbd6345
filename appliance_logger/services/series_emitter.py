"""Maps classified status fields onto the fixed catalog of time-series."""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from appliance_logger.models import DescriptorKind, Device, DeviceType, RenderedField, SeriesPoint
from appliance_logger.services.influx_service import TimeSeriesSink

STATE_KEY     = "State"
COURSE_MARKER = "Course"
OFFLINE_VALUE = 0
OFFLINE_LABEL = "-"

# extra offline series per device type
OFFLINE_COURSE_SERIES: Dict[DeviceType, str] = {
    DeviceType.DRYER:  "course",
    DeviceType.WASHER: "apcourse",
}


class SeriesEmitter:
    """Turns one snapshot (or an offline fallback) into committed series points.

    Only the machine state and course-like reference fields are stored;
    every other field is logged and dropped. With ``dry_run`` set the flush
    is skipped and nothing else changes.
    """

    def __init__(self, sink: Optional[TimeSeriesSink], *, dry_run: bool = False):
        if sink is None and not dry_run:
            raise ValueError("a sink is required unless dry_run is set")
        self.sink    = sink
        self.dry_run = dry_run
        self.log     = logging.getLogger(self.__class__.__name__)

    def emit_snapshot(self, device: Device, fields: Iterable[RenderedField],
                      timestamp: int) -> List[SeriesPoint]:
        pairs: Dict[str, object] = {}
        for f in fields:
            self.log.info(f.describe())
            match f.kind:
                case DescriptorKind.ENUM if f.key == STATE_KEY:
                    self._add(pairs, "state", f.raw)
                    self._add(pairs, "state_description", f.label)
                case DescriptorKind.REFERENCE if COURSE_MARKER in f.key:
                    series = f.key.lower()
                    self._add(pairs, series, f.raw)
                    self._add(pairs, f"{series}_description", f.label)
        return self._flush(device, pairs, timestamp)

    def emit_offline(self, device: Device, timestamp: int) -> List[SeriesPoint]:
        pairs: Dict[str, object] = {"state": OFFLINE_VALUE, "state_description": OFFLINE_LABEL}
        course = OFFLINE_COURSE_SERIES.get(device.type)
        if course:
            pairs[course] = OFFLINE_VALUE
            pairs[f"{course}_description"] = OFFLINE_LABEL
        return self._flush(device, pairs, timestamp)

    def _add(self, pairs: Dict[str, object], series: str, value: object) -> None:
        if series in pairs:
            self.log.warning("series %s repeated in one snapshot, keeping last value", series)
        pairs[series] = value

    def _flush(self, device: Device, pairs: Dict[str, object], timestamp: int) -> List[SeriesPoint]:
        tags   = device.tags
        points = [SeriesPoint(series, value, tags, timestamp) for series, value in pairs.items()]
        if not points:
            return points
        self.log.debug(points)
        if self.dry_run:
            self.log.debug("dry run: skipping write of %d points", len(points))
        else:
            self.sink.write_points(points)
        return points
