"""Local Store: the single source of truth for all record collections.

The store keeps every collection in memory and mirrors all of them to a
key-value backend after each mutation. Persistence is best effort: a load
that fails yields an empty collection and a save that fails is logged and
skipped, leaving memory ahead of storage until the next successful write.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional, Protocol, Tuple, Type, TypeVar
from uuid import UUID

from pydantic_core import PydanticSerializationError

from vetria.shared.domain.records import (
    COLLECTION_KEYS,
    BaseRecord,
    DeliveryRecord,
    MaterialRecord,
    OrderRecord,
    ProcessRecord,
    RecordDecodeError,
    TaskRecord,
    build_seed_records,
    collection_key,
    decode_collection,
    encode_collection,
)
from vetria.shared.infrastructure.persistence import KeyValueStoreError

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseRecord)


class KeyValueBackend(Protocol):
    def get(self, key: str) -> Optional[bytes]: ...

    def set(self, key: str, value: bytes) -> None: ...


class LocalStore:
    """In-memory record collections mirrored to a key-value backend."""

    def __init__(
        self,
        backend: KeyValueBackend,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.backend = backend
        self._clock = clock
        self._collections: Dict[Type[BaseRecord], List[BaseRecord]] = {
            record_type: [] for record_type in COLLECTION_KEYS
        }
        self.seeded = False

    # --- Lifecycle ---

    def initialize(self) -> None:
        """Load every collection, seeding demonstration data on a fresh install.

        Never raises: unreadable or missing collections load as empty.
        """
        for record_type in COLLECTION_KEYS:
            self._collections[record_type] = self._load(record_type)

        self.seeded = False
        if all(not records for records in self._collections.values()):
            logger.info("No persisted records found, seeding demonstration data")
            for record_type, records in build_seed_records(self._clock()).items():
                self._collections[record_type] = list(records)
            self.seeded = True
            self._save_all()

        logger.info(f"Local store initialized: {self.counts()}")

    def _load(self, record_type: Type[R]) -> List[R]:
        key = collection_key(record_type)
        try:
            data = self.backend.get(key)
        except KeyValueStoreError as e:
            logger.warning(f"Could not read collection '{key}', treating as empty: {e}")
            return []

        if data is None:
            logger.debug(f"No persisted data for '{key}'")
            return []

        try:
            return decode_collection(record_type, data)
        except RecordDecodeError as e:
            logger.warning(f"Discarding unreadable collection '{key}': {e}")
            return []

    # --- Mutations ---

    def add(self, record: BaseRecord) -> None:
        """Append a record to its collection and persist all collections.

        Identifiers are unique per collection: a record whose id is already
        present is ignored.
        """
        if self.contains(type(record), record.id):
            logger.warning(f"Add ignored, {type(record).__name__} {record.id} already exists")
            return

        records = self._collection_for(type(record))
        records.append(record)
        logger.debug(f"Added {type(record).__name__} {record.id}")
        self._save_all()

    def delete(self, record_type: Type[BaseRecord], record_id: UUID) -> None:
        """Remove the first record with ``record_id``; unknown ids are ignored."""
        records = self._collection_for(record_type)
        for index, record in enumerate(records):
            if record.id == record_id:
                del records[index]
                logger.debug(f"Deleted {record_type.__name__} {record_id}")
                break
        else:
            logger.debug(f"Delete ignored, no {record_type.__name__} with id {record_id}")
        self._save_all()

    def _save_all(self) -> None:
        for record_type, records in self._collections.items():
            key = COLLECTION_KEYS[record_type]
            try:
                data = encode_collection(record_type, records)
            except PydanticSerializationError as e:
                logger.error(f"Could not serialize collection '{key}', write skipped: {e}")
                continue

            try:
                self.backend.set(key, data)
            except KeyValueStoreError as e:
                logger.error(f"Could not persist collection '{key}': {e}")

    # --- Reads ---

    def _collection_for(self, record_type: Type[BaseRecord]) -> List[BaseRecord]:
        try:
            return self._collections[record_type]
        except KeyError:
            raise TypeError(f"Unsupported record type: {record_type!r}") from None

    def contains(self, record_type: Type[BaseRecord], record_id: UUID) -> bool:
        return any(record.id == record_id for record in self._collection_for(record_type))

    def records(self, record_type: Type[R]) -> Tuple[R, ...]:
        """Snapshot of a collection in insertion order."""
        return tuple(self._collection_for(record_type))  # type: ignore[arg-type]

    @property
    def processes(self) -> Tuple[ProcessRecord, ...]:
        return self.records(ProcessRecord)

    @property
    def materials(self) -> Tuple[MaterialRecord, ...]:
        return self.records(MaterialRecord)

    @property
    def tasks(self) -> Tuple[TaskRecord, ...]:
        return self.records(TaskRecord)

    @property
    def orders(self) -> Tuple[OrderRecord, ...]:
        return self.records(OrderRecord)

    @property
    def deliveries(self) -> Tuple[DeliveryRecord, ...]:
        return self.records(DeliveryRecord)

    def counts(self) -> Dict[str, int]:
        return {COLLECTION_KEYS[t]: len(records) for t, records in self._collections.items()}
