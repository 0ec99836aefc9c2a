"""Demonstration records written when a fresh install has no data."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Type
from uuid import NAMESPACE_URL, uuid5

from .models import (
    BaseRecord,
    DeliveryRecord,
    MaterialRecord,
    OrderRecord,
    ProcessRecord,
    TaskRecord,
    compute_order_total,
)

_SEED_NAMESPACE = uuid5(NAMESPACE_URL, "vetria:seed")


def _seed_id(name: str):
    return uuid5(_SEED_NAMESPACE, name)


def build_seed_records(now: Optional[datetime] = None) -> Dict[Type[BaseRecord], List[BaseRecord]]:
    """Return exactly one record per collection.

    Identifiers are fixed so that seeding twice produces the same records.
    """
    now = now or datetime.now()
    day = timedelta(days=1)

    process = ProcessRecord(
        id=_seed_id("process/BATCH-001"),
        title="Tempered Glass Heating",
        description="Heat glass at 620°C for strength.",
        process_type="Heating",
        temperature="620°C",
        duration_minutes=45,
        pressure_level="Normal",
        tool_used="Furnace A2",
        supervisor="John Doe",
        batch_number="BATCH-001",
        date_created=now,
        last_modified=now,
        stage="Initial",
        safety_level="High",
        notes="Ensure slow cooling.",
        quality_check_status="Pending",
        energy_used_kwh=12.5,
        wastage_percent=1.5,
        color_type="Clear",
        thickness_mm=6.0,
        clarity_rating="A+",
        humidity_level="30%",
        result_code="OK-001",
        location="Plant 1",
        approval_status="Approved",
        maintenance_needed=False,
        tags=["heating", "tempered"],
    )

    material = MaterialRecord(
        id=_seed_id("material/MAT-001"),
        name="Silica Sand",
        code="MAT-001",
        category="Base",
        sub_category="Primary",
        supplier="Crystal Supply Co.",
        supplier_contact="+1234567890",
        source_country="Australia",
        stock_level=2500,
        reorder_threshold=500,
        purchase_price=20.5,
        unit_type="kg",
        color="White",
        density=2.65,
        melting_point=1700.0,
        toxicity_level="Low",
        flammability="None",
        safety_notes="Handle with mask.",
        storage_location="Warehouse A",
        received_date=now,
        expiry_date=now + 365 * day,
        quality_grade="A",
        batch_code="SAND-2025",
        usage_count=120,
        is_reusable=True,
        tags=["silica", "sand", "raw"],
    )

    task = TaskRecord(
        id=_seed_id("task/TASK-001"),
        title="Cutting Glass Sheets",
        description="Cut large sheets into standard sizes.",
        assigned_to="Michael",
        department="Cutting",
        priority_level="High",
        due_date=now + day,
        created_date=now,
        start_time=now,
        end_time=now + timedelta(hours=1),
        status="In Progress",
        progress_percent=60,
        time_spent_minutes=45,
        required_tools=["Cutter", "Safety Goggles"],
        safety_compliance=True,
        remarks="Good accuracy.",
        supervisor_name="Sara",
        cost_estimate=45.0,
        approval_required=True,
        approval_status="Approved",
        delay_reason="None",
        stage="Mid",
        outcome="Smooth edges",
        last_updated=now,
        reference_code="TASK-001",
        tags=["cutting", "process"],
    )

    order = OrderRecord(
        id=_seed_id("order/ORD-1001"),
        order_number="ORD-1001",
        client_name="BrightGlass Ltd",
        client_phone="+987654321",
        client_email="info@brightglass.com",
        client_address="123 Market Road",
        order_details="50 tempered glass sheets 6mm",
        quantity=50,
        unit_price=25.0,
        total_price=compute_order_total(50, 25.0, 5.0, 10.0, 100.0),
        order_date=now,
        expected_delivery_date=now + 3 * day,
        status="Processing",
        payment_method="Cash",
        payment_status="Pending",
        discount_percent=5.0,
        tax_percent=10.0,
        shipping_method="Truck",
        shipping_cost=100.0,
        special_instructions="Handle carefully",
        handled_by="Liam",
        region="Central",
        priority_level="Normal",
        confirmation_code="CONF-001",
        refund_eligible=False,
        tags=["client", "order"],
    )

    delivery = DeliveryRecord(
        id=_seed_id("delivery/DEL-1001"),
        delivery_number="DEL-1001",
        driver_name="Alex",
        vehicle_id="VH-234",
        license_plate="XYZ-123",
        route_code="R001",
        start_location="Plant 1",
        destination="BrightGlass Ltd",
        distance_km=45.0,
        estimated_time_minutes=60,
        actual_time_minutes=58,
        fuel_used_liters=5.5,
        start_date=now,
        delivery_date=now + timedelta(hours=1),
        is_delivered=True,
        status="Completed",
        package_count=50,
        fragile_items=50,
        temperature_requirement="Ambient",
        delivery_notes="Delivered without damage.",
        receiver_name="Daniel",
        receiver_signature="Daniel_Sign",
        feedback_rating=5,
        issue_reported=False,
        issue_description="",
        completion_code="COMP-001",
        tags=["delivery", "complete"],
    )

    return {
        ProcessRecord: [process],
        MaterialRecord: [material],
        TaskRecord: [task],
        OrderRecord: [order],
        DeliveryRecord: [delivery],
    }
