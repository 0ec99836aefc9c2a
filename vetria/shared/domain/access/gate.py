"""Access Gate: decides once per launch between native screens and remote content.

State machine::

    IDLE -> VALIDATING -> APPROVED(payload, destination)
                       -> USE_NATIVE

Both terminal states are final for the life of the process. Every transition
is published on the event bus under ``access.state``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import BaseModel, ConfigDict

from vetria.shared.core import events
from vetria.shared.core.event_bus import EventBus

logger = logging.getLogger(__name__)


class GateStatus(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    APPROVED = "approved"
    USE_NATIVE = "use_native"


class AccessState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: GateStatus
    payload: Optional[Dict[str, Any]] = None
    destination: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (GateStatus.APPROVED, GateStatus.USE_NATIVE)

    @classmethod
    def approved(cls, payload: Dict[str, Any], destination: str) -> "AccessState":
        return cls(status=GateStatus.APPROVED, payload=payload, destination=destination)

    @classmethod
    def use_native(cls) -> "AccessState":
        return cls(status=GateStatus.USE_NATIVE)


IDLE = AccessState(status=GateStatus.IDLE)
VALIDATING = AccessState(status=GateStatus.VALIDATING)


class ValidationProbe(Protocol):
    async def check(self) -> AccessState:
        """Return a terminal state: approved or use_native."""
        ...


class NativeOnlyProbe:
    """Probe used when no remote endpoint is configured."""

    async def check(self) -> AccessState:
        return AccessState.use_native()


class HttpValidationProbe:
    """Single GET against the validation endpoint.

    Approved when the endpoint answers 2xx with a JSON object carrying a
    non-empty ``url``; anything else means native mode. The timeout belongs to
    the HTTP client, the gate itself never cancels the check.
    """

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._transport = transport

    async def check(self) -> AccessState:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.endpoint_url)
            response.raise_for_status()
            body = response.json()

        if not isinstance(body, dict):
            logger.info("Validation response is not a JSON object, using native UI")
            return AccessState.use_native()

        destination = body.get("url")
        if not isinstance(destination, str) or not destination.strip():
            logger.info("Validation response has no destination, using native UI")
            return AccessState.use_native()

        return AccessState.approved(payload=body, destination=destination.strip())


class AccessGate:
    """One-shot launch check exposing its state through the event bus."""

    def __init__(self, event_bus: EventBus, probe: ValidationProbe):
        self.bus = event_bus
        self.probe = probe
        self._state: AccessState = IDLE

    @property
    def state(self) -> AccessState:
        return self._state

    async def initiate_validation(self) -> AccessState:
        """Run the check once; later calls return the current state untouched."""
        if self._state.status is not GateStatus.IDLE:
            logger.debug(f"Validation already started (state={self._state.status.value}), ignoring")
            return self._state

        await self._transition(VALIDATING)

        try:
            result = await self.probe.check()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Access validation failed, falling back to native UI: {e}")
            result = AccessState.use_native()
        except Exception as e:
            # Misconfigured endpoints (httpx.InvalidURL) and probe bugs end up here
            logger.exception(f"Access probe crashed, falling back to native UI: {e}")
            result = AccessState.use_native()

        if not result.is_terminal:
            logger.warning(f"Probe returned non-terminal state {result.status.value}, using native UI")
            result = AccessState.use_native()

        await self._transition(result)
        return result

    async def _transition(self, new_state: AccessState) -> None:
        logger.info(f"Access gate: {self._state.status.value} -> {new_state.status.value}")
        self._state = new_state
        await self.bus.publish(
            events.TOPIC_ACCESS_STATE,
            events.create_access_state_event(
                new_state.status.value,
                payload=new_state.payload,
                destination=new_state.destination,
            ),
        )
