"""Connection simulator tests: each handshake branch forced deterministically."""

from unittest.mock import AsyncMock, patch

import pytest

from dbscope.core.errors import (
    ConnectionTimeoutError,
    DatabaseConnectionError,
    MissingParametersError,
)
from dbscope.schemas.session import ConnectionDetails
from dbscope.services.connection_simulator import ConnectionSimulator


def _simulator(roll: float = 1.0, probability: float = 0.05) -> ConnectionSimulator:
    return ConnectionSimulator(
        latency_s=0, failure_probability=probability, failure_roll=lambda: roll
    )


class TestDemoMode:
    async def test_demo_always_succeeds(self):
        assert await _simulator().connect(ConnectionDetails(is_demo=True)) is True

    async def test_demo_bypasses_failure_injection(self):
        sim = _simulator(roll=0.0, probability=1.0)
        assert await sim.connect(ConnectionDetails(is_demo=True, ssl=False)) is True


class TestValidation:
    async def test_empty_host_fails_with_missing_parameters(self):
        details = ConnectionDetails(host="", user="x", database="y", ssl=True)
        with pytest.raises(MissingParametersError, match="Missing required connection parameters"):
            await _simulator().connect(details)

    @pytest.mark.parametrize("missing", ["host", "user", "database"])
    async def test_each_required_field(self, missing, full_details):
        details = full_details.model_copy(update={missing: None})
        with pytest.raises(MissingParametersError):
            await _simulator().connect(details)

    async def test_validation_runs_before_failure_roll(self):
        roll = lambda: pytest.fail("roll must not be consulted")  # noqa: E731
        sim = ConnectionSimulator(latency_s=0, failure_roll=roll)
        with pytest.raises(MissingParametersError):
            await sim.connect(ConnectionDetails())

    async def test_port_and_password_are_optional(self):
        details = ConnectionDetails(host="h", user="u", database="d")
        assert await _simulator().connect(details) is True


class TestFailureInjection:
    async def test_roll_below_probability_times_out(self, full_details):
        with pytest.raises(ConnectionTimeoutError, match=r"Connection timed out \(5432\)"):
            await _simulator(roll=0.01).connect(full_details)

    async def test_roll_at_probability_succeeds(self, full_details):
        assert await _simulator(roll=0.05).connect(full_details) is True

    async def test_errors_share_base_class(self, full_details):
        with pytest.raises(DatabaseConnectionError) as exc_info:
            await _simulator(roll=0.0).connect(full_details)
        assert exc_info.value.kind == "timeout"

    async def test_calls_are_independent(self, full_details):
        rolls = iter([0.0, 0.9])
        sim = ConnectionSimulator(latency_s=0, failure_roll=lambda: next(rolls))
        with pytest.raises(ConnectionTimeoutError):
            await sim.connect(full_details)
        assert await sim.connect(full_details) is True


class TestLatency:
    async def test_sleeps_before_resolving(self, full_details):
        sim = ConnectionSimulator(latency_s=1.2, failure_roll=lambda: 1.0)
        with patch(
            "dbscope.services.connection_simulator.asyncio.sleep", new=AsyncMock()
        ) as mock_sleep:
            await sim.connect(full_details)
        mock_sleep.assert_awaited_once_with(1.2)

    async def test_sleeps_even_when_rejected(self):
        sim = ConnectionSimulator(latency_s=1.2)
        with patch(
            "dbscope.services.connection_simulator.asyncio.sleep", new=AsyncMock()
        ) as mock_sleep:
            with pytest.raises(MissingParametersError):
                await sim.connect(ConnectionDetails())
        mock_sleep.assert_awaited_once_with(1.2)
