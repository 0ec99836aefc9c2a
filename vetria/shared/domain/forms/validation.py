"""Add-form validation for every record kind.

Each ``build_*`` function takes the raw values of an add screen (text fields
as strings, toggles as bools, pickers as datetimes), checks them, and returns
a new record. All problems are collected before anything is raised so the
user sees the full list at once; no record is built while any check fails.
Fields missing from the form take the add screen's starting value from
``FORM_DEFAULTS``.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any, List, Mapping, Optional, Type

from vetria.shared.domain.catalog import FORM_DEFAULTS
from vetria.shared.domain.records import (
    BaseRecord,
    DeliveryRecord,
    MaterialRecord,
    OrderRecord,
    ProcessRecord,
    TaskRecord,
    compute_order_total,
    split_tags,
)

FormData = Mapping[str, Any]


class FormValidationError(ValueError):
    """Raised with every message produced by a failed add form."""

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))

    def format(self) -> str:
        return "Please correct the following issues:\n" + "\n".join(f"• {m}" for m in self.messages)


class _FormReader:
    """Collects values and messages from one form submission."""

    def __init__(self, form: FormData, now: Optional[datetime], record_type: Type[BaseRecord]):
        self.form = form
        self.now = now or datetime.now()
        self.defaults = FORM_DEFAULTS[record_type]
        self.errors: List[str] = []

    def text(self, field: str) -> str:
        value = self.form.get(field)
        if value is None:
            return str(self.defaults.get(field, ""))
        return str(value)

    def required(self, field: str, label: str, verb: str = "is") -> str:
        value = self.text(field)
        if not value.strip():
            self.errors.append(f"{label} {verb} required.")
        return value

    def flag(self, field: str) -> bool:
        return bool(self.form.get(field, self.defaults.get(field, False)))

    def date(self, field: str) -> datetime:
        value = self.form.get(field)
        if isinstance(value, datetime):
            return value
        return self.now + self.defaults.get(field, timedelta(0))

    def tags(self, field: str = "tags") -> List[str]:
        return split_tags(self.text(field))

    def _parse(self, field: str, convert) -> Optional[Any]:
        try:
            return convert(self.text(field).strip())
        except ValueError:
            return None

    def integer(self, field: str) -> Optional[int]:
        return self._parse(field, int)

    def number(self, field: str) -> Optional[float]:
        # "nan", "inf" and overflowing literals parse but cannot be stored
        value = self._parse(field, float)
        return value if value is not None and math.isfinite(value) else None

    def check(self, ok: bool, message: str) -> None:
        if not ok:
            self.errors.append(message)

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise FormValidationError(self.errors)


def build_process(form: FormData, now: Optional[datetime] = None) -> ProcessRecord:
    r = _FormReader(form, now, ProcessRecord)

    required = [
        ("title", "Title"),
        ("process_type", "Process Type"),
        ("temperature", "Temperature"),
        ("pressure_level", "Pressure Level"),
        ("tool_used", "Tool Used"),
        ("supervisor", "Supervisor"),
        ("batch_number", "Batch Number"),
        ("stage", "Stage"),
        ("safety_level", "Safety Level"),
        ("quality_check_status", "Quality Status"),
        ("color_type", "Color Type"),
        ("clarity_rating", "Clarity Rating"),
        ("humidity_level", "Humidity Level"),
        ("result_code", "Result Code"),
        ("location", "Location"),
        ("approval_status", "Approval Status"),
    ]
    values = {field: r.required(field, label) for field, label in required}

    duration = r.integer("duration_minutes")
    r.check(duration is not None, "Duration must be a valid number.")
    energy = r.number("energy_used_kwh")
    r.check(energy is not None, "Energy Used must be a valid number.")
    wastage = r.number("wastage_percent")
    r.check(wastage is not None, "Wastage % must be a valid number.")
    thickness = r.number("thickness_mm")
    r.check(thickness is not None, "Thickness (mm) must be a valid number.")

    r.raise_if_invalid()
    return ProcessRecord(
        **values,
        description=r.text("description"),
        duration_minutes=duration,
        date_created=r.now,
        last_modified=r.now,
        notes=r.text("notes"),
        energy_used_kwh=energy,
        wastage_percent=wastage,
        thickness_mm=thickness,
        maintenance_needed=r.flag("maintenance_needed"),
        tags=r.tags(),
    )


def build_material(form: FormData, now: Optional[datetime] = None) -> MaterialRecord:
    r = _FormReader(form, now, MaterialRecord)

    required = [
        ("name", "Name"),
        ("code", "Code"),
        ("category", "Category"),
        ("sub_category", "Sub-Category"),
        ("supplier", "Supplier"),
        ("source_country", "Source Country"),
        ("unit_type", "Unit Type"),
        ("color", "Color"),
        ("toxicity_level", "Toxicity Level"),
        ("flammability", "Flammability"),
        ("storage_location", "Storage Location"),
        ("quality_grade", "Quality Grade"),
        ("batch_code", "Batch Code"),
    ]
    values = {field: r.required(field, label) for field, label in required}

    stock = r.integer("stock_level")
    r.check(stock is not None and stock >= 0, "Stock Level must be a non-negative number.")
    threshold = r.integer("reorder_threshold")
    r.check(threshold is not None and threshold >= 0, "Reorder Threshold must be a non-negative number.")
    price = r.number("purchase_price")
    r.check(price is not None and price > 0, "Purchase Price must be a positive number.")
    density = r.number("density")
    r.check(density is not None and density > 0, "Density must be a positive number.")
    melting = r.number("melting_point")
    r.check(melting is not None and melting > 0, "Melting Point must be a positive number.")
    usage = r.integer("usage_count")
    r.check(usage is not None and usage >= 0, "Usage Count must be a non-negative number.")

    r.raise_if_invalid()
    return MaterialRecord(
        **values,
        supplier_contact=r.text("supplier_contact"),
        stock_level=stock,
        reorder_threshold=threshold,
        purchase_price=price,
        density=density,
        melting_point=melting,
        safety_notes=r.text("safety_notes"),
        received_date=r.date("received_date"),
        expiry_date=r.date("expiry_date"),
        usage_count=usage,
        is_reusable=r.flag("is_reusable"),
        tags=r.tags(),
    )


def build_task(form: FormData, now: Optional[datetime] = None) -> TaskRecord:
    r = _FormReader(form, now, TaskRecord)

    title = r.required("title", "Title")
    assigned_to = r.required("assigned_to", "Assignee")
    department = r.required("department", "Department")
    reference_code = r.required("reference_code", "Reference Code")

    # An unparsable progress value is stored as 0 rather than rejected
    progress = r.integer("progress_percent")
    if progress is not None:
        r.check(0 <= progress <= 100, "Progress must be between 0 and 100.")
    cost = r.number("cost_estimate")
    r.check(cost is not None, "Cost Estimate must be a valid number.")
    time_spent = r.integer("time_spent_minutes")
    r.check(time_spent is not None, "Time Spent must be a valid integer.")

    r.raise_if_invalid()
    return TaskRecord(
        title=title,
        description=r.text("description"),
        assigned_to=assigned_to,
        department=department,
        priority_level=r.text("priority_level"),
        due_date=r.date("due_date"),
        created_date=r.now,
        start_time=r.date("start_time"),
        end_time=r.date("end_time"),
        status=r.text("status"),
        progress_percent=progress or 0,
        time_spent_minutes=time_spent,
        required_tools=split_tags(r.text("required_tools")),
        safety_compliance=r.flag("safety_compliance"),
        remarks=r.text("remarks"),
        supervisor_name=r.text("supervisor_name"),
        cost_estimate=cost,
        approval_required=r.flag("approval_required"),
        approval_status=r.text("approval_status"),
        delay_reason=r.text("delay_reason"),
        stage=r.text("stage"),
        outcome=r.text("outcome"),
        last_updated=r.now,
        reference_code=reference_code,
        tags=r.tags(),
    )


def build_order(form: FormData, now: Optional[datetime] = None) -> OrderRecord:
    """Validate an order form.

    ``total_price`` is taken from the form when it parses as a number (the
    override field); otherwise it is computed with :func:`compute_order_total`.
    """
    r = _FormReader(form, now, OrderRecord)

    order_number = r.required("order_number", "Order Number")
    client_name = r.required("client_name", "Client Name")
    phone = r.text("client_phone")
    r.check(len(phone) >= 7, "Client Phone is invalid.")
    email = r.text("client_email")
    r.check("@" in email and "." in email, "Client Email is invalid.")
    address = r.required("client_address", "Client Address")
    details = r.required("order_details", "Order Details", verb="are")

    quantity = r.integer("quantity")
    r.check(quantity is not None and quantity > 0, "Quantity must be a positive number.")
    unit_price = r.number("unit_price")
    r.check(unit_price is not None and unit_price > 0, "Unit Price must be a positive number.")

    discount = r.number("discount_percent") or 0.0
    tax = r.number("tax_percent") or 0.0
    shipping = r.number("shipping_cost") or 0.0
    total = r.number("total_price")
    if total is None and quantity is not None and unit_price is not None:
        total = compute_order_total(quantity, unit_price, discount, tax, shipping)
        r.check(math.isfinite(total), "Total Price is too large.")

    r.raise_if_invalid()

    return OrderRecord(
        order_number=order_number,
        client_name=client_name,
        client_phone=phone,
        client_email=email,
        client_address=address,
        order_details=details,
        quantity=quantity,
        unit_price=unit_price,
        total_price=total,
        order_date=r.date("order_date"),
        expected_delivery_date=r.date("expected_delivery_date"),
        status=r.text("status"),
        payment_method=r.text("payment_method"),
        payment_status=r.text("payment_status"),
        discount_percent=discount,
        tax_percent=tax,
        shipping_method=r.text("shipping_method"),
        shipping_cost=shipping,
        special_instructions=r.text("special_instructions"),
        handled_by=r.text("handled_by"),
        region=r.text("region"),
        priority_level=r.text("priority_level"),
        confirmation_code=r.text("confirmation_code"),
        refund_eligible=r.flag("refund_eligible"),
        tags=r.tags(),
    )


def build_delivery(form: FormData, now: Optional[datetime] = None) -> DeliveryRecord:
    r = _FormReader(form, now, DeliveryRecord)

    required = [
        ("delivery_number", "Delivery Number"),
        ("driver_name", "Driver Name"),
        ("vehicle_id", "Vehicle ID"),
        ("license_plate", "License Plate"),
        ("route_code", "Route Code"),
        ("start_location", "Start Location"),
        ("destination", "Destination"),
        ("completion_code", "Completion Code"),
    ]
    values = {field: r.required(field, label) for field, label in required}

    distance = r.number("distance_km")
    r.check(distance is not None and distance > 0, "Distance (KM) must be a positive number.")
    estimated = r.integer("estimated_time_minutes")
    r.check(estimated is not None and estimated > 0, "Estimated Time must be a positive integer.")
    actual = r.integer("actual_time_minutes")
    r.check(actual is not None and actual > 0, "Actual Time must be a positive integer.")
    fuel = r.number("fuel_used_liters")
    r.check(fuel is not None and fuel > 0, "Fuel Used must be a positive number.")
    packages = r.integer("package_count")
    r.check(packages is not None and packages >= 0, "Package Count must be a non-negative integer.")
    fragile = r.integer("fragile_items")
    r.check(fragile is not None and fragile >= 0, "Fragile Items count must be a non-negative integer.")
    rating = r.integer("feedback_rating")
    r.check(rating is not None and 1 <= rating <= 5, "Feedback Rating must be an integer between 1 and 5.")

    issue_reported = r.flag("issue_reported")
    issue_description = r.text("issue_description")
    if issue_reported:
        r.check(bool(issue_description.strip()), "Issue Description is required if an issue is reported.")

    r.raise_if_invalid()
    return DeliveryRecord(
        **values,
        distance_km=distance,
        estimated_time_minutes=estimated,
        actual_time_minutes=actual,
        fuel_used_liters=fuel,
        start_date=r.date("start_date"),
        delivery_date=r.date("delivery_date"),
        is_delivered=r.flag("is_delivered"),
        status=r.text("status"),
        package_count=packages,
        fragile_items=fragile,
        temperature_requirement=r.text("temperature_requirement"),
        delivery_notes=r.text("delivery_notes"),
        receiver_name=r.text("receiver_name"),
        receiver_signature=r.text("receiver_signature"),
        feedback_rating=rating,
        issue_reported=issue_reported,
        issue_description=issue_description,
        tags=r.tags(),
    )
