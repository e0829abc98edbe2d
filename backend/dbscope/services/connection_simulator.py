"""Connection Simulator: emulates a database handshake without opening a socket.

Outcomes per call: connected, MissingParametersError, or ConnectionTimeoutError.
Calls are independent; there is no retry state.
"""

import asyncio
import random
from collections.abc import Callable

import structlog

from dbscope.core.config import settings
from dbscope.core.errors import ConnectionTimeoutError, MissingParametersError
from dbscope.core.metrics import connection_attempts_total
from dbscope.schemas.session import ConnectionDetails

logger = structlog.stdlib.get_logger(__name__)

# Port reported in the timeout message, matching the default PostgreSQL port.
DEFAULT_PORT = 5432


class ConnectionSimulator:
    """Validates connection details and injects random transient failures.

    ``failure_roll`` returns a float in [0, 1); the handshake times out when
    the roll falls below ``failure_probability``. Tests pass a constant to
    force a branch.
    """

    def __init__(
        self,
        latency_s: float | None = None,
        failure_probability: float | None = None,
        failure_roll: Callable[[], float] | None = None,
    ):
        sim = settings.simulation
        self._latency_s = latency_s if latency_s is not None else sim.connect_latency
        self._failure_probability = (
            failure_probability
            if failure_probability is not None
            else sim.connect_failure_probability
        )
        self._failure_roll = failure_roll or random.random

    async def connect(self, details: ConnectionDetails) -> bool:
        await asyncio.sleep(self._latency_s)

        if details.is_demo:
            connection_attempts_total.labels(outcome="demo").inc()
            logger.info("connection_established", demo=True)
            return True

        missing = [
            field
            for field in ("host", "user", "database")
            if not getattr(details, field)
        ]
        if missing:
            connection_attempts_total.labels(outcome="missing_parameters").inc()
            logger.warning("connection_failed", reason="missing_parameters", missing=missing)
            raise MissingParametersError()

        if self._failure_roll() < self._failure_probability:
            connection_attempts_total.labels(outcome="timeout").inc()
            logger.warning("connection_failed", reason="timeout", host=details.host)
            raise ConnectionTimeoutError(DEFAULT_PORT)

        connection_attempts_total.labels(outcome="connected").inc()
        logger.info(
            "connection_established",
            host=details.host,
            database=details.database,
            ssl=details.ssl,
        )
        return True
