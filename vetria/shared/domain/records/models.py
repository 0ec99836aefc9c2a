"""Record models for the five tracked collections.

Records are immutable once created. Unknown fields are rejected so that a
persisted blob written by a different model layout fails to decode instead of
loading partially.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Type, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class BaseRecord(BaseModel):
    # Non-finite floats serialize as null and would make the whole collection unreadable
    model_config = ConfigDict(frozen=True, extra='forbid', allow_inf_nan=False)

    id: UUID = Field(default_factory=uuid4)
    tags: List[str] = Field(default_factory=list)


class ProcessRecord(BaseRecord):
    """A furnace/production process run."""

    title: str
    description: str = ""
    process_type: str
    temperature: str
    duration_minutes: int
    pressure_level: str
    tool_used: str
    supervisor: str
    batch_number: str
    date_created: datetime
    last_modified: datetime
    stage: str
    safety_level: str
    notes: str = ""
    quality_check_status: str
    energy_used_kwh: float
    wastage_percent: float
    color_type: str
    thickness_mm: float
    clarity_rating: str
    humidity_level: str
    result_code: str
    location: str
    approval_status: str
    maintenance_needed: bool = False


class MaterialRecord(BaseRecord):
    """A raw material held in inventory."""

    name: str
    code: str
    category: str
    sub_category: str
    supplier: str
    supplier_contact: str = ""
    source_country: str
    stock_level: int
    reorder_threshold: int
    purchase_price: float
    unit_type: str
    color: str
    density: float
    melting_point: float
    toxicity_level: str
    flammability: str
    safety_notes: str = ""
    storage_location: str
    received_date: datetime
    expiry_date: datetime
    quality_grade: str
    batch_code: str
    usage_count: int
    is_reusable: bool = True

    @property
    def needs_reorder(self) -> bool:
        return self.stock_level <= self.reorder_threshold


class TaskRecord(BaseRecord):
    """A unit of shop-floor work."""

    title: str
    description: str = ""
    assigned_to: str
    department: str
    priority_level: str
    due_date: datetime
    created_date: datetime
    start_time: datetime
    end_time: datetime
    status: str
    progress_percent: int
    time_spent_minutes: int
    required_tools: List[str] = Field(default_factory=list)
    safety_compliance: bool = True
    remarks: str = ""
    supervisor_name: str = ""
    cost_estimate: float
    approval_required: bool = False
    approval_status: str
    delay_reason: str = "None"
    stage: str
    outcome: str = "N/A"
    last_updated: datetime
    reference_code: str


class OrderRecord(BaseRecord):
    """A client order."""

    order_number: str
    client_name: str
    client_phone: str
    client_email: str
    client_address: str
    order_details: str
    quantity: int
    unit_price: float
    total_price: float
    order_date: datetime
    expected_delivery_date: datetime
    status: str
    payment_method: str
    payment_status: str
    discount_percent: float = 0.0
    tax_percent: float = 0.0
    shipping_method: str
    shipping_cost: float = 0.0
    special_instructions: str = ""
    handled_by: str = ""
    region: str
    priority_level: str
    confirmation_code: str = ""
    refund_eligible: bool = False


class DeliveryRecord(BaseRecord):
    """A completed or scheduled delivery run."""

    delivery_number: str
    driver_name: str
    vehicle_id: str
    license_plate: str
    route_code: str
    start_location: str
    destination: str
    distance_km: float
    estimated_time_minutes: int
    actual_time_minutes: int
    fuel_used_liters: float
    start_date: datetime
    delivery_date: datetime
    is_delivered: bool = False
    status: str
    package_count: int
    fragile_items: int
    temperature_requirement: str
    delivery_notes: str = ""
    receiver_name: str = ""
    receiver_signature: str = ""
    feedback_rating: int
    issue_reported: bool = False
    issue_description: str = ""
    completion_code: str


Record = Union[ProcessRecord, MaterialRecord, TaskRecord, OrderRecord, DeliveryRecord]

# Storage key per record type. Order is the order collections are loaded and saved in.
COLLECTION_KEYS: Dict[Type[BaseRecord], str] = {
    ProcessRecord: "processes",
    MaterialRecord: "materials",
    TaskRecord: "tasks",
    OrderRecord: "orders",
    DeliveryRecord: "deliveries",
}


def collection_key(record_type: Type[BaseRecord]) -> str:
    """Return the storage key for a record type.

    Raises:
        TypeError: If ``record_type`` is not one of the five record models
    """
    try:
        return COLLECTION_KEYS[record_type]
    except KeyError:
        raise TypeError(f"Unsupported record type: {record_type!r}") from None


def compute_order_total(
    quantity: float,
    unit_price: float,
    discount_percent: float = 0.0,
    tax_percent: float = 0.0,
    shipping_cost: float = 0.0,
) -> float:
    """subtotal * (1 - discount/100) * (1 + tax/100) + shipping"""
    subtotal = quantity * unit_price
    discounted = subtotal * (1 - discount_percent / 100)
    taxed = discounted * (1 + tax_percent / 100)
    return taxed + shipping_cost


def split_tags(text: str) -> List[str]:
    """Split comma separated input, trimming each piece.

    Zero-length pieces between adjacent commas are dropped; pieces that are
    only whitespace survive as empty strings.
    """
    return [piece.strip() for piece in text.split(",") if piece]
