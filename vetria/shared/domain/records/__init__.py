"""Record models, collection codec and demonstration data."""

from .codec import RecordDecodeError, decode_collection, encode_collection
from .models import (
    COLLECTION_KEYS,
    BaseRecord,
    DeliveryRecord,
    MaterialRecord,
    OrderRecord,
    ProcessRecord,
    Record,
    TaskRecord,
    collection_key,
    compute_order_total,
    split_tags,
)
from .seed import build_seed_records

__all__ = [
    "BaseRecord",
    "ProcessRecord",
    "MaterialRecord",
    "TaskRecord",
    "OrderRecord",
    "DeliveryRecord",
    "Record",
    "COLLECTION_KEYS",
    "collection_key",
    "compute_order_total",
    "split_tags",
    "encode_collection",
    "decode_collection",
    "RecordDecodeError",
    "build_seed_records",
]
