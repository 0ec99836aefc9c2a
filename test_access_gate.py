"""Tests for the launch-time Access Gate."""

import asyncio

import httpx
import pytest

from vetria.shared.core import events
from vetria.shared.core.event_bus import EventBus
from vetria.shared.domain.access import (
    AccessGate,
    AccessState,
    GateStatus,
    HttpValidationProbe,
    NativeOnlyProbe,
)

ENDPOINT = "https://gate.example.test/check"


def probe_for(handler):
    return HttpValidationProbe(ENDPOINT, timeout=2.0, transport=httpx.MockTransport(handler))


async def recorded_gate(probe):
    bus = EventBus()
    seen = []

    async def on_state(payload):
        seen.append(payload)

    await bus.subscribe(events.TOPIC_ACCESS_STATE, on_state)
    return AccessGate(bus, probe), seen


class StaticProbe:
    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = 0

    async def check(self):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_starts_idle():
    gate, seen = await recorded_gate(NativeOnlyProbe())
    assert gate.state.status is GateStatus.IDLE
    assert seen == []


@pytest.mark.asyncio
async def test_native_only_probe_goes_native():
    gate, seen = await recorded_gate(NativeOnlyProbe())
    state = await gate.initiate_validation()

    assert state.status is GateStatus.USE_NATIVE
    assert [p["status"] for p in seen] == ["validating", "use_native"]


@pytest.mark.asyncio
async def test_approved_response_publishes_destination():
    def handler(request):
        assert request.method == "GET"
        return httpx.Response(200, json={"url": " https://content.example.test/home ", "campaign": "spring"})

    gate, seen = await recorded_gate(probe_for(handler))
    state = await gate.initiate_validation()

    assert state.status is GateStatus.APPROVED
    assert state.destination == "https://content.example.test/home"
    assert state.payload["campaign"] == "spring"
    assert [p["status"] for p in seen] == ["validating", "approved"]
    assert seen[-1]["destination"] == "https://content.example.test/home"


@pytest.mark.asyncio
async def test_non_2xx_goes_native():
    gate, seen = await recorded_gate(probe_for(lambda request: httpx.Response(503)))
    state = await gate.initiate_validation()

    assert state.status is GateStatus.USE_NATIVE
    assert seen[-1]["status"] == "use_native"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "   "}, {"url": 42}, ["https://x.test"]])
async def test_response_without_destination_goes_native(body):
    gate, _ = await recorded_gate(probe_for(lambda request: httpx.Response(200, json=body)))
    state = await gate.initiate_validation()
    assert state.status is GateStatus.USE_NATIVE


@pytest.mark.asyncio
async def test_malformed_json_goes_native():
    gate, _ = await recorded_gate(probe_for(lambda request: httpx.Response(200, content=b"<html>")))
    state = await gate.initiate_validation()
    assert state.status is GateStatus.USE_NATIVE


@pytest.mark.asyncio
async def test_network_error_goes_native():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gate, seen = await recorded_gate(probe_for(handler))
    state = await gate.initiate_validation()

    assert state.status is GateStatus.USE_NATIVE
    assert [p["status"] for p in seen] == ["validating", "use_native"]


@pytest.mark.asyncio
async def test_second_call_after_completion_is_a_no_op():
    probe = StaticProbe(result=AccessState.approved({"url": "https://a.test"}, "https://a.test"))
    gate, seen = await recorded_gate(probe)

    first = await gate.initiate_validation()
    second = await gate.initiate_validation()

    assert first == second
    assert probe.calls == 1
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_concurrent_calls_run_the_check_once():
    probe = StaticProbe(result=AccessState.use_native(), delay=0.05)
    gate, seen = await recorded_gate(probe)

    first, second = await asyncio.gather(gate.initiate_validation(), gate.initiate_validation())

    assert probe.calls == 1
    assert first.status is GateStatus.USE_NATIVE
    # The late caller sees the state as it was when it arrived
    assert second.status is GateStatus.VALIDATING
    assert [p["status"] for p in seen] == ["validating", "use_native"]
    assert gate.state.status is GateStatus.USE_NATIVE


@pytest.mark.asyncio
async def test_non_terminal_probe_result_goes_native():
    gate, _ = await recorded_gate(StaticProbe(result=AccessState(status=GateStatus.VALIDATING)))
    state = await gate.initiate_validation()
    assert state.status is GateStatus.USE_NATIVE


@pytest.mark.asyncio
async def test_subscriber_sees_validating_before_probe_finishes():
    bus = EventBus()
    order = []

    class RecordingProbe:
        async def check(self):
            order.append("probe")
            return AccessState.use_native()

    async def on_state(payload):
        order.append(payload["status"])

    await bus.subscribe(events.TOPIC_ACCESS_STATE, on_state)
    await AccessGate(bus, RecordingProbe()).initiate_validation()

    assert order == ["validating", "probe", "use_native"]


@pytest.mark.asyncio
@pytest.mark.parametrize("endpoint", ["http://[::1/check", "http://gate.example.test/\x07check"])
async def test_invalid_endpoint_url_goes_native(endpoint):
    probe = HttpValidationProbe(endpoint, timeout=2.0, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    gate, seen = await recorded_gate(probe)

    state = await gate.initiate_validation()

    assert state.status is GateStatus.USE_NATIVE
    assert gate.state.status is GateStatus.USE_NATIVE
    assert [p["status"] for p in seen] == ["validating", "use_native"]


@pytest.mark.asyncio
async def test_unexpected_probe_error_goes_native():
    gate, seen = await recorded_gate(StaticProbe(error=RuntimeError("boom")))

    state = await gate.initiate_validation()

    assert state.status is GateStatus.USE_NATIVE
    assert seen[-1]["status"] == "use_native"
