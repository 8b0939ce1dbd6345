
# influx_service.py

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from influxdb import InfluxDBClient
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError

from appliance_logger.core.exceptions import SinkError
from appliance_logger.models import SeriesPoint


logger = logging.getLogger(__name__)


class TimeSeriesSink(ABC):
    """Write-only destination for series points."""

    @abstractmethod
    def write_points(self, points: Sequence[SeriesPoint]) -> None:
        pass

    def close(self) -> None:
        pass


class InfluxService(TimeSeriesSink):
    """Writes series points to an InfluxDB 1.x database, one measurement per series."""

    def __init__(self, host: str, port: int, database: str, *,
                 user: str = "", pwd: str = ""):
        self.database = database
        self.client   = InfluxDBClient(host=host, port=port, username=user,
                                       password=pwd, database=database)

    def write_points(self, points: Sequence[SeriesPoint]) -> None:
        body: List[dict] = [p.to_influx() for p in points]
        logger.debug(f"Writing {len(body)} points to InfluxDB database={self.database}")
        try:
            self.client.write_points(body, time_precision="s")
        except (InfluxDBClientError, InfluxDBServerError) as e:
            raise SinkError(f"InfluxDB rejected {len(body)} points: {e}") from e

    def close(self) -> None:
        self.client.close()
