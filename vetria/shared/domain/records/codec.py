"""JSON encoding of whole record collections."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from .models import BaseRecord

R = TypeVar("R", bound=BaseRecord)


class RecordDecodeError(ValueError):
    """A persisted collection blob could not be read back."""


@lru_cache(maxsize=None)
def _adapter(record_type: Type[BaseRecord]) -> TypeAdapter:
    return TypeAdapter(List[record_type])  # type: ignore[valid-type]


def encode_collection(record_type: Type[R], records: Sequence[R]) -> bytes:
    """Serialize a collection to a JSON array of field-tagged objects."""
    return _adapter(record_type).dump_json(list(records))


def decode_collection(record_type: Type[R], data: bytes) -> List[R]:
    """Parse a JSON array produced by :func:`encode_collection`.

    Raises:
        RecordDecodeError: If the blob is not valid JSON or does not match the model
    """
    try:
        return _adapter(record_type).validate_json(data)
    except ValidationError as e:
        raise RecordDecodeError(
            f"Could not decode {record_type.__name__} collection: {e.error_count()} error(s)"
        ) from e
