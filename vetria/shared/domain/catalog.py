"""Static field catalog: display label, icon and input kind for every record field.

Screens look fields up here by name instead of inspecting the models, so the
detail, list and add views for all five collections share one rendering path.
Icons are Flet ``ft.Icons`` member names.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, NamedTuple, Tuple, Type

from vetria.shared.domain.records import (
    BaseRecord,
    DeliveryRecord,
    MaterialRecord,
    OrderRecord,
    ProcessRecord,
    TaskRecord,
)


class FieldSpec(NamedTuple):
    name: str
    label: str
    icon: str
    kind: str = "text"  # text | int | float | bool | date | tags


class CollectionSpec(NamedTuple):
    title: str
    icon: str
    color: str
    subtitle: str
    headline_field: str
    caption_field: str
    search_fields: Tuple[str, ...]
    fields: Tuple[FieldSpec, ...]

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)


F = FieldSpec

CATALOG: Dict[Type[BaseRecord], CollectionSpec] = {
    ProcessRecord: CollectionSpec(
        title="Processes",
        icon="LOCAL_FIRE_DEPARTMENT",
        color="#FF8A50",
        subtitle="Active",
        headline_field="title",
        caption_field="batch_number",
        search_fields=("title", "batch_number", "supervisor"),
        fields=(
            F("title", "Title", "TITLE"),
            F("description", "Description", "DESCRIPTION"),
            F("process_type", "Process Type", "CATEGORY"),
            F("temperature", "Temperature", "THERMOSTAT"),
            F("duration_minutes", "Duration (min)", "TIMER", "int"),
            F("pressure_level", "Pressure Level", "SPEED"),
            F("tool_used", "Tool Used", "BUILD"),
            F("supervisor", "Supervisor", "PERSON"),
            F("batch_number", "Batch Number", "NUMBERS"),
            F("date_created", "Created", "CALENDAR_TODAY", "date"),
            F("last_modified", "Last Modified", "UPDATE", "date"),
            F("stage", "Stage", "STAIRS"),
            F("safety_level", "Safety Level", "HEALTH_AND_SAFETY"),
            F("notes", "Notes", "NOTES"),
            F("quality_check_status", "Quality Status", "VERIFIED"),
            F("energy_used_kwh", "Energy Used (kWh)", "BOLT", "float"),
            F("wastage_percent", "Wastage %", "DELETE_SWEEP", "float"),
            F("color_type", "Color Type", "PALETTE"),
            F("thickness_mm", "Thickness (mm)", "STRAIGHTEN", "float"),
            F("clarity_rating", "Clarity Rating", "STAR"),
            F("humidity_level", "Humidity Level", "WATER_DROP"),
            F("result_code", "Result Code", "QR_CODE"),
            F("location", "Location", "PLACE"),
            F("approval_status", "Approval Status", "APPROVAL"),
            F("maintenance_needed", "Maintenance Needed", "HANDYMAN", "bool"),
            F("tags", "Tags", "SELL", "tags"),
        ),
    ),
    MaterialRecord: CollectionSpec(
        title="Materials",
        icon="INVENTORY_2",
        color="#4ECDC4",
        subtitle="In Stock",
        headline_field="name",
        caption_field="code",
        search_fields=("name", "code", "supplier", "category"),
        fields=(
            F("name", "Name", "LABEL"),
            F("code", "Code", "QR_CODE"),
            F("category", "Category", "CATEGORY"),
            F("sub_category", "Sub-Category", "SUBDIRECTORY_ARROW_RIGHT"),
            F("supplier", "Supplier", "STOREFRONT"),
            F("supplier_contact", "Supplier Contact", "PHONE"),
            F("source_country", "Source Country", "PUBLIC"),
            F("stock_level", "Stock Level", "INVENTORY", "int"),
            F("reorder_threshold", "Reorder Threshold", "WARNING_AMBER", "int"),
            F("purchase_price", "Purchase Price", "PAYMENTS", "float"),
            F("unit_type", "Unit Type", "SQUARE_FOOT"),
            F("color", "Color", "PALETTE"),
            F("density", "Density", "SCALE", "float"),
            F("melting_point", "Melting Point", "THERMOSTAT", "float"),
            F("toxicity_level", "Toxicity Level", "SCIENCE"),
            F("flammability", "Flammability", "WHATSHOT"),
            F("safety_notes", "Safety Notes", "HEALTH_AND_SAFETY"),
            F("storage_location", "Storage Location", "WAREHOUSE"),
            F("received_date", "Received", "CALENDAR_TODAY", "date"),
            F("expiry_date", "Expires", "EVENT_BUSY", "date"),
            F("quality_grade", "Quality Grade", "GRADE"),
            F("batch_code", "Batch Code", "NUMBERS"),
            F("usage_count", "Usage Count", "REPEAT", "int"),
            F("is_reusable", "Reusable", "RECYCLING", "bool"),
            F("tags", "Tags", "SELL", "tags"),
        ),
    ),
    TaskRecord: CollectionSpec(
        title="Tasks",
        icon="HANDYMAN",
        color="#3D60C8",
        subtitle="Open",
        headline_field="title",
        caption_field="reference_code",
        search_fields=("title", "assigned_to", "reference_code"),
        fields=(
            F("title", "Title", "TITLE"),
            F("description", "Description", "DESCRIPTION"),
            F("assigned_to", "Assigned To", "PERSON"),
            F("department", "Department", "APARTMENT"),
            F("priority_level", "Priority", "PRIORITY_HIGH"),
            F("due_date", "Due", "EVENT", "date"),
            F("created_date", "Created", "CALENDAR_TODAY", "date"),
            F("start_time", "Start", "PLAY_ARROW", "date"),
            F("end_time", "End", "STOP", "date"),
            F("status", "Status", "FLAG"),
            F("progress_percent", "Progress %", "DONUT_LARGE", "int"),
            F("time_spent_minutes", "Time Spent (min)", "TIMER", "int"),
            F("required_tools", "Required Tools", "BUILD", "tags"),
            F("safety_compliance", "Safety Compliance", "HEALTH_AND_SAFETY", "bool"),
            F("remarks", "Remarks", "NOTES"),
            F("supervisor_name", "Supervisor", "SUPERVISOR_ACCOUNT"),
            F("cost_estimate", "Cost Estimate", "PAYMENTS", "float"),
            F("approval_required", "Approval Required", "RULE", "bool"),
            F("approval_status", "Approval Status", "APPROVAL"),
            F("delay_reason", "Delay Reason", "HOURGLASS_EMPTY"),
            F("stage", "Stage", "STAIRS"),
            F("outcome", "Outcome", "TASK_ALT"),
            F("last_updated", "Last Updated", "UPDATE", "date"),
            F("reference_code", "Reference Code", "QR_CODE"),
            F("tags", "Tags", "SELL", "tags"),
        ),
    ),
    OrderRecord: CollectionSpec(
        title="Orders",
        icon="SHOPPING_CART",
        color="#C4B48A",
        subtitle="Pending",
        headline_field="order_number",
        caption_field="client_name",
        search_fields=("order_number", "client_name", "status"),
        fields=(
            F("order_number", "Order Number", "RECEIPT"),
            F("client_name", "Client Name", "PERSON"),
            F("client_phone", "Client Phone", "PHONE"),
            F("client_email", "Client Email", "EMAIL"),
            F("client_address", "Client Address", "HOME"),
            F("order_details", "Order Details", "DESCRIPTION"),
            F("quantity", "Quantity", "INVENTORY", "int"),
            F("unit_price", "Unit Price", "ATTACH_MONEY", "float"),
            F("total_price", "Total Price (Override)", "PAYMENTS", "float"),
            F("order_date", "Order Date", "CALENDAR_TODAY", "date"),
            F("expected_delivery_date", "Expected Delivery", "LOCAL_SHIPPING", "date"),
            F("status", "Status", "FLAG"),
            F("payment_method", "Payment Method", "CREDIT_CARD"),
            F("payment_status", "Payment Status", "PRICE_CHECK"),
            F("discount_percent", "Discount %", "DISCOUNT", "float"),
            F("tax_percent", "Tax %", "PERCENT", "float"),
            F("shipping_method", "Shipping Method", "LOCAL_SHIPPING"),
            F("shipping_cost", "Shipping Cost", "ATTACH_MONEY", "float"),
            F("special_instructions", "Special Instructions", "NOTES"),
            F("handled_by", "Handled By", "SUPPORT_AGENT"),
            F("region", "Region", "MAP"),
            F("priority_level", "Priority", "PRIORITY_HIGH"),
            F("confirmation_code", "Confirmation Code", "VERIFIED"),
            F("refund_eligible", "Refund Eligible", "CURRENCY_EXCHANGE", "bool"),
            F("tags", "Tags", "SELL", "tags"),
        ),
    ),
    DeliveryRecord: CollectionSpec(
        title="Deliveries",
        icon="LOCAL_SHIPPING",
        color="#A8E6D8",
        subtitle="Today",
        headline_field="delivery_number",
        caption_field="destination",
        search_fields=("driver_name", "delivery_number", "destination"),
        fields=(
            F("delivery_number", "Delivery Number", "RECEIPT"),
            F("driver_name", "Driver Name", "PERSON"),
            F("vehicle_id", "Vehicle ID", "DIRECTIONS_CAR"),
            F("license_plate", "License Plate", "PIN"),
            F("route_code", "Route Code", "ROUTE"),
            F("start_location", "Start Location", "TRIP_ORIGIN"),
            F("destination", "Destination", "PLACE"),
            F("distance_km", "Distance (KM)", "STRAIGHTEN", "float"),
            F("estimated_time_minutes", "Est. Time (Min)", "TIMER", "int"),
            F("actual_time_minutes", "Actual Time (Min)", "HISTORY", "int"),
            F("fuel_used_liters", "Fuel Used (L)", "LOCAL_GAS_STATION", "float"),
            F("start_date", "Start Date", "CALENDAR_TODAY", "date"),
            F("delivery_date", "Delivery Date", "EVENT_AVAILABLE", "date"),
            F("is_delivered", "Delivered", "CHECK_CIRCLE", "bool"),
            F("status", "Status", "FLAG"),
            F("package_count", "Package Count", "INVENTORY_2", "int"),
            F("fragile_items", "Fragile Items", "WARNING_AMBER", "int"),
            F("temperature_requirement", "Temperature Req.", "THERMOSTAT"),
            F("delivery_notes", "Delivery Notes", "NOTES"),
            F("receiver_name", "Receiver Name", "PERSON_PIN"),
            F("receiver_signature", "Receiver Signature", "DRAW"),
            F("feedback_rating", "Feedback Rating (1-5)", "STAR", "int"),
            F("issue_reported", "Issue Reported", "REPORT", "bool"),
            F("issue_description", "Issue Description", "REPORT_PROBLEM"),
            F("completion_code", "Completion Code", "VERIFIED"),
            F("tags", "Tags", "SELL", "tags"),
        ),
    ),
}

# Fields filled in by the store or the form builder rather than typed by the user
GENERATED_FIELDS = frozenset({"date_created", "last_modified", "created_date", "last_updated"})


def collection_spec(record_type: Type[BaseRecord]) -> CollectionSpec:
    return CATALOG[record_type]


def input_fields(record_type: Type[BaseRecord]) -> List[FieldSpec]:
    """Fields an add screen asks for, in display order."""
    return [spec for spec in CATALOG[record_type].fields if spec.name not in GENERATED_FIELDS]


def display_value(record: BaseRecord, spec: FieldSpec) -> str:
    value = getattr(record, spec.name)
    if spec.kind == "bool":
        return "Yes" if value else "No"
    if spec.kind == "date":
        return value.strftime("%Y-%m-%d %H:%M")
    if spec.kind == "float":
        return f"{value:.2f}"
    if spec.kind == "tags":
        return ", ".join(value) if value else "N/A"
    text = str(value)
    return text if text else "N/A"


# Values an add screen starts with. Timedeltas are offsets from the moment the
# screen opens; fields not listed start blank (or off, for switches).
FORM_DEFAULTS: Dict[Type[BaseRecord], Dict[str, Any]] = {
    ProcessRecord: {},
    MaterialRecord: {
        "expiry_date": timedelta(days=365),
        "quality_grade": "A",
        "usage_count": "0",
        "is_reusable": True,
    },
    TaskRecord: {
        "priority_level": "Medium",
        "due_date": timedelta(days=1),
        "end_time": timedelta(hours=1),
        "status": "Scheduled",
        "progress_percent": "0",
        "time_spent_minutes": "0",
        "safety_compliance": True,
        "cost_estimate": "0.0",
        "approval_status": "Pending",
        "delay_reason": "None",
        "stage": "Initial",
        "outcome": "N/A",
    },
    OrderRecord: {
        "expected_delivery_date": timedelta(days=3),
        "status": "New",
        "payment_method": "Bank Transfer",
        "payment_status": "Pending",
        "discount_percent": "0.0",
        "tax_percent": "10.0",
        "shipping_method": "Ground",
        "shipping_cost": "0.0",
        "region": "East",
        "priority_level": "Normal",
        "refund_eligible": True,
        "tags": "client,new",
    },
    DeliveryRecord: {
        "delivery_date": timedelta(hours=1),
        "status": "Pending",
        "temperature_requirement": "Ambient",
    },
}


def initial_form_values(record_type: Type[BaseRecord], now: datetime) -> Dict[str, Any]:
    """Starting value of every add-screen input: strings, bools and datetimes."""
    defaults = FORM_DEFAULTS[record_type]
    values: Dict[str, Any] = {}
    for spec in input_fields(record_type):
        default = defaults.get(spec.name)
        if spec.kind == "date":
            values[spec.name] = now + (default or timedelta(0))
        elif spec.kind == "bool":
            values[spec.name] = bool(default)
        else:
            values[spec.name] = "" if default is None else default
    return values
