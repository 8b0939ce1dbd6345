"""Series emission, time-series sink and credential persistence."""

from .influx_service import InfluxService, TimeSeriesSink
from .series_emitter import SeriesEmitter
from .credential_store import CredentialStore

__all__ = [
    'InfluxService',
    'TimeSeriesSink',
    'SeriesEmitter',
    'CredentialStore',
]
