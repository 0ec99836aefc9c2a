"""Application Session State.

One ``AppState`` exists per running session. It owns the event bus, the Local
Store and the Access Gate, and is handed to every controller explicitly.
UI components observe changes by subscribing to bus topics.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Type
from uuid import UUID

from vetria.shared.core import events
from vetria.shared.core.configuration import SystemConfig
from vetria.shared.core.event_bus import EventBus, EventPayload
from vetria.shared.domain.access import (
    AccessGate,
    AccessState,
    GateStatus,
    HttpValidationProbe,
    NativeOnlyProbe,
    ValidationProbe,
)
from vetria.shared.domain.records import BaseRecord, collection_key
from vetria.shared.domain.store import LocalStore
from vetria.shared.infrastructure.persistence import DuckDBKeyValueStore

logger = logging.getLogger(__name__)

LOG_BUFFER_SIZE = 200


def build_probe(config: SystemConfig) -> ValidationProbe:
    gate_config = config.access_gate
    if gate_config.enabled and gate_config.endpoint_url:
        return HttpValidationProbe(gate_config.endpoint_url, timeout=gate_config.timeout_seconds)
    return NativeOnlyProbe()


class AppState:
    """State for one application session.

    Lifecycle:
        state = AppState.from_config(config)
        await state.initialize()     # wire bus subscriptions
        await state.launch()         # run the access gate, load records if native
        ...
        state.close()
    """

    def __init__(
        self,
        event_bus: EventBus,
        store: LocalStore,
        gate: AccessGate,
        backend: Optional[DuckDBKeyValueStore] = None,
    ) -> None:
        self.bus = event_bus
        self.store = store
        self.gate = gate
        self._backend = backend

        self.store_ready: bool = False
        self.logs: List[Dict[str, Any]] = []

        self._started = False

    @classmethod
    def from_config(cls, config: SystemConfig, event_bus: Optional[EventBus] = None) -> "AppState":
        bus = event_bus or EventBus()
        backend = DuckDBKeyValueStore(config.storage.db_path)
        store = LocalStore(backend)
        gate = AccessGate(bus, build_probe(config))
        return cls(bus, store, gate, backend=backend)

    async def initialize(self) -> None:
        """Bind to EventBus events. Safe to call more than once."""
        if self._started:
            return

        await self.bus.subscribe(events.TOPIC_LOGS_EVENT, self._handle_log_event)
        self._started = True

    async def launch(self) -> AccessState:
        """Resolve the access gate, then load the store when native mode wins."""
        state = await self.gate.initiate_validation()
        if state.status is GateStatus.USE_NATIVE and not self.store_ready:
            self.store.initialize()
            self.store_ready = True
            await self.bus.publish(
                events.TOPIC_STORE_LOADED,
                events.create_store_loaded_event(self.store.counts(), seeded=self.store.seeded),
            )
            if self.store.seeded:
                await self.bus.publish(events.TOPIC_STORE_SEEDED, self.store.counts())
        return state

    # --- Public Actions ---

    async def add_record(self, record: BaseRecord) -> bool:
        """Add a record and announce it. Returns False for a duplicate id."""
        if self.store.contains(type(record), record.id):
            logger.warning(f"Duplicate {type(record).__name__} {record.id} not added")
            return False

        self.store.add(record)
        await self.bus.publish(
            events.TOPIC_RECORD_ADDED,
            events.create_record_added_event(collection_key(type(record)), str(record.id)),
        )
        return True

    async def delete_record(self, record_type: Type[BaseRecord], record_id: UUID) -> None:
        self.store.delete(record_type, record_id)
        await self.bus.publish(
            events.TOPIC_RECORD_DELETED,
            events.create_record_deleted_event(collection_key(record_type), str(record_id)),
        )

    async def push_log(self, message: str, level: str = "info") -> None:
        await self.bus.publish(events.TOPIC_LOGS_EVENT, events.create_logs_event(message, level))

    def close(self) -> None:
        self.bus.clear()
        if self._backend is not None:
            self._backend.close()

    # --- Event Handlers ---

    async def _handle_log_event(self, payload: EventPayload) -> None:
        if payload:
            self.logs.append({"ts": time.time(), **payload})
            del self.logs[:-LOG_BUFFER_SIZE]
