from __future__ import annotations
import logging, socket
from dataclasses import dataclass
from typing import Callable, Tuple, Type, TypeVar

import requests

from ..exceptions import TransportError

T = TypeVar("T")

log = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5

# network-level faults expected to clear on their own
TRANSIENT_FAULTS: Tuple[Type[BaseException], ...] = (
    requests.exceptions.ConnectTimeout,
    requests.exceptions.ReadTimeout,
    requests.exceptions.ConnectionError,
    socket.gaierror,
    socket.timeout,
    TimeoutError,
    ConnectionError,
    TransportError,
)


def run_with_retry(operation: Callable[[int], T],
                   transient_faults: Tuple[Type[BaseException], ...] = TRANSIENT_FAULTS,
                   max_retries: int = DEFAULT_MAX_RETRIES) -> T:
    """Call ``operation(attempt)`` until it succeeds or retries run out.

    Faults listed in ``transient_faults`` are retried; once more than
    ``max_retries`` retries would be needed the last fault is re-raised
    unchanged. Anything else propagates on the first occurrence.
    """
    attempt = 0
    while True:
        try:
            return operation(attempt)
        except transient_faults as e:
            attempt += 1
            if attempt > max_retries:
                raise
            log.info("retrying after %s (attempt %d/%d)", type(e).__name__, attempt, max_retries)


@dataclass(frozen=True)
class RetryPolicy:
    transient_faults: Tuple[Type[BaseException], ...] = TRANSIENT_FAULTS
    max_retries: int = DEFAULT_MAX_RETRIES

    def __call__(self, operation: Callable[[int], T]) -> T:
        return run_with_retry(operation, self.transient_faults, self.max_retries)

    def including(self, *faults: Type[BaseException]) -> "RetryPolicy":
        """Same ceiling, with extra fault kinds treated as transient."""
        return RetryPolicy(self.transient_faults + tuple(faults), self.max_retries)
