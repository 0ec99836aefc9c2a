"""Tests for add-form validation."""

from datetime import datetime, timedelta

import pytest

from vetria.shared.domain.catalog import initial_form_values
from vetria.shared.domain.forms import (
    FORM_BUILDERS,
    FormValidationError,
    build_delivery,
    build_material,
    build_order,
    build_process,
    build_task,
)
from vetria.shared.domain.records import (
    COLLECTION_KEYS,
    DeliveryRecord,
    MaterialRecord,
    OrderRecord,
    ProcessRecord,
    TaskRecord,
)

NOW = datetime(2025, 3, 14, 9, 30)


def process_form(**overrides):
    form = {
        "title": "Annealing",
        "process_type": "Cooling",
        "temperature": "540°C",
        "duration_minutes": "90",
        "pressure_level": "Normal",
        "tool_used": "Lehr B",
        "supervisor": "Ana",
        "batch_number": "BATCH-077",
        "stage": "Final",
        "safety_level": "Medium",
        "quality_check_status": "Passed",
        "energy_used_kwh": "8.5",
        "wastage_percent": "0.4",
        "color_type": "Bronze",
        "thickness_mm": "4",
        "clarity_rating": "A",
        "humidity_level": "25%",
        "result_code": "OK-077",
        "location": "Plant 2",
        "approval_status": "Pending",
        "maintenance_needed": True,
        "tags": "cooling, lehr",
    }
    form.update(overrides)
    return form


def order_form(**overrides):
    form = {
        "order_number": "ORD-2001",
        "client_name": "ClearView Inc",
        "client_phone": "5551234",
        "client_email": "buy@clearview.test",
        "client_address": "9 Harbour St",
        "order_details": "Laminated panels",
        "quantity": "50",
        "unit_price": "25",
        "discount_percent": "5",
        "tax_percent": "10",
        "shipping_cost": "100",
        "total_price": "",
    }
    form.update(overrides)
    return form


def delivery_form(**overrides):
    form = {
        "delivery_number": "DEL-2001",
        "driver_name": "Priya",
        "vehicle_id": "VH-900",
        "license_plate": "GLS-900",
        "route_code": "R009",
        "start_location": "Plant 1",
        "destination": "ClearView Inc",
        "distance_km": "12.5",
        "estimated_time_minutes": "30",
        "actual_time_minutes": "35",
        "fuel_used_liters": "2.1",
        "package_count": "10",
        "fragile_items": "0",
        "feedback_rating": "4",
        "completion_code": "COMP-2001",
    }
    form.update(overrides)
    return form


class TestProcessForm:
    def test_valid_form(self):
        record = build_process(process_form(), now=NOW)

        assert record.title == "Annealing"
        assert record.duration_minutes == 90
        assert record.thickness_mm == 4.0
        assert record.date_created == NOW
        assert record.last_modified == NOW
        assert record.maintenance_needed is True
        assert record.tags == ["cooling", "lehr"]

    def test_all_messages_are_collected(self):
        with pytest.raises(FormValidationError) as exc_info:
            build_process(process_form(title="  ", duration_minutes="long", energy_used_kwh="?"), now=NOW)

        assert exc_info.value.messages == [
            "Title is required.",
            "Duration must be a valid number.",
            "Energy Used must be a valid number.",
        ]

    @pytest.mark.parametrize("value", ["nan", "inf", "-Infinity", "1e999"])
    def test_non_finite_numbers_rejected(self, value):
        with pytest.raises(FormValidationError) as exc_info:
            build_process(process_form(energy_used_kwh=value, thickness_mm=value), now=NOW)

        assert exc_info.value.messages == [
            "Energy Used must be a valid number.",
            "Thickness (mm) must be a valid number.",
        ]

    def test_format_lists_each_message(self):
        error = FormValidationError(["Title is required.", "Stage is required."])
        assert error.format() == (
            "Please correct the following issues:\n• Title is required.\n• Stage is required."
        )


class TestMaterialForm:
    def test_negative_stock_rejected(self):
        form = {
            "name": "Cullet", "code": "MAT-010", "category": "Recycled", "sub_category": "Clear",
            "supplier": "Local", "source_country": "NZ", "unit_type": "kg", "color": "Clear",
            "toxicity_level": "Low", "flammability": "None", "storage_location": "Yard",
            "quality_grade": "B", "batch_code": "CUL-1", "stock_level": "-5", "reorder_threshold": "10",
            "purchase_price": "1.5", "density": "2.5", "melting_point": "1400", "usage_count": "0",
        }
        with pytest.raises(FormValidationError) as exc_info:
            build_material(form, now=NOW)
        assert exc_info.value.messages == ["Stock Level must be a non-negative number."]

    def test_dates_default_from_now(self):
        form = {
            "name": "Cullet", "code": "MAT-010", "category": "Recycled", "sub_category": "Clear",
            "supplier": "Local", "source_country": "NZ", "unit_type": "kg", "color": "Clear",
            "toxicity_level": "Low", "flammability": "None", "storage_location": "Yard",
            "quality_grade": "B", "batch_code": "CUL-1", "stock_level": "5", "reorder_threshold": "10",
            "purchase_price": "1.5", "density": "2.5", "melting_point": "1400", "usage_count": "0",
        }
        record = build_material(form, now=NOW)

        assert record.received_date == NOW
        assert record.expiry_date == NOW + timedelta(days=365)
        assert record.is_reusable is True
        assert record.needs_reorder is True


class TestTaskForm:
    def test_unparsable_progress_is_stored_as_zero(self):
        form = {
            "title": "Polish edges", "assigned_to": "Kai", "department": "Finishing",
            "reference_code": "TASK-010", "progress_percent": "half", "cost_estimate": "12",
            "time_spent_minutes": "0", "required_tools": "Polisher, Gloves",
        }
        record = build_task(form, now=NOW)

        assert record.progress_percent == 0
        assert record.required_tools == ["Polisher", "Gloves"]
        assert record.due_date == NOW + timedelta(days=1)

    def test_progress_out_of_range_rejected(self):
        form = {
            "title": "Polish edges", "assigned_to": "Kai", "department": "Finishing",
            "reference_code": "TASK-010", "progress_percent": "120", "cost_estimate": "12",
            "time_spent_minutes": "0",
        }
        with pytest.raises(FormValidationError) as exc_info:
            build_task(form, now=NOW)
        assert exc_info.value.messages == ["Progress must be between 0 and 100."]


class TestOrderForm:
    def test_total_is_computed_when_not_overridden(self):
        record = build_order(order_form(), now=NOW)

        assert isinstance(record, OrderRecord)
        assert record.total_price == pytest.approx(1406.25)
        assert record.expected_delivery_date == NOW + timedelta(days=3)

    def test_total_override_wins(self):
        record = build_order(order_form(total_price="999.99"), now=NOW)
        assert record.total_price == pytest.approx(999.99)

    def test_blank_adjustments_default_to_zero(self):
        record = build_order(order_form(discount_percent="", tax_percent="x", shipping_cost=""), now=NOW)

        assert record.discount_percent == 0.0
        assert record.total_price == pytest.approx(1250.0)

    def test_contact_checks(self):
        with pytest.raises(FormValidationError) as exc_info:
            build_order(order_form(client_phone="123", client_email="nobody", order_details=""), now=NOW)

        assert exc_info.value.messages == [
            "Client Phone is invalid.",
            "Client Email is invalid.",
            "Order Details are required.",
        ]

    def test_quantity_must_be_positive(self):
        with pytest.raises(FormValidationError) as exc_info:
            build_order(order_form(quantity="0"), now=NOW)
        assert exc_info.value.messages == ["Quantity must be a positive number."]

    def test_nan_unit_price_rejected(self):
        with pytest.raises(FormValidationError) as exc_info:
            build_order(order_form(unit_price="nan"), now=NOW)
        assert exc_info.value.messages == ["Unit Price must be a positive number."]

    def test_non_finite_adjustments_count_as_zero(self):
        record = build_order(order_form(discount_percent="nan", tax_percent="inf", shipping_cost=""), now=NOW)

        assert record.discount_percent == 0.0
        assert record.tax_percent == 0.0
        assert record.total_price == pytest.approx(1250.0)

    def test_non_finite_total_override_falls_back_to_computed(self):
        record = build_order(order_form(total_price="inf"), now=NOW)
        assert record.total_price == pytest.approx(1406.25)

    def test_overflowing_total_rejected(self):
        with pytest.raises(FormValidationError) as exc_info:
            build_order(order_form(quantity="10", unit_price="1e308"), now=NOW)
        assert exc_info.value.messages == ["Total Price is too large."]


class TestDeliveryForm:
    def test_valid_form(self):
        record = build_delivery(delivery_form(tags="fragile,,express"), now=NOW)

        assert record.feedback_rating == 4
        assert record.tags == ["fragile", "express"]
        assert record.delivery_date == NOW + timedelta(hours=1)

    def test_rating_must_be_between_one_and_five(self):
        with pytest.raises(FormValidationError) as exc_info:
            build_delivery(delivery_form(feedback_rating="6"), now=NOW)
        assert exc_info.value.messages == ["Feedback Rating must be an integer between 1 and 5."]

    def test_reported_issue_needs_description(self):
        with pytest.raises(FormValidationError) as exc_info:
            build_delivery(delivery_form(issue_reported=True, issue_description=" "), now=NOW)
        assert exc_info.value.messages == ["Issue Description is required if an issue is reported."]

    def test_picked_dates_are_kept(self):
        start = datetime(2025, 4, 1, 8, 0)
        record = build_delivery(delivery_form(start_date=start), now=NOW)
        assert record.start_date == start


def test_every_collection_has_a_builder():
    assert set(FORM_BUILDERS) == set(COLLECTION_KEYS)


class TestPrefilledForms:
    """The add screen starts from ``initial_form_values``; filling only the
    required inputs must give a valid record."""

    def prefilled(self, record_type, **entered):
        form = initial_form_values(record_type, NOW)
        form.update(entered)
        return form

    def test_process(self):
        record = build_process(self.prefilled(ProcessRecord, **process_form()), now=NOW)
        assert record.maintenance_needed is True
        assert record.date_created == NOW

    def test_material(self):
        form = self.prefilled(
            MaterialRecord,
            name="Cullet", code="MAT-010", category="Recycled", sub_category="Clear",
            supplier="Local", source_country="NZ", unit_type="kg", color="Clear",
            toxicity_level="Low", flammability="None", storage_location="Yard",
            batch_code="CUL-1", stock_level="5", reorder_threshold="10",
            purchase_price="1.5", density="2.5", melting_point="1400",
        )
        record = build_material(form, now=NOW)

        assert record.quality_grade == "A"
        assert record.is_reusable is True
        assert record.usage_count == 0
        assert record.expiry_date == NOW + timedelta(days=365)

    def test_task(self):
        form = self.prefilled(
            TaskRecord, title="Polish edges", assigned_to="Kai", department="Finishing", reference_code="TASK-010",
        )
        record = build_task(form, now=NOW)

        assert record.status == "Scheduled"
        assert record.priority_level == "Medium"
        assert record.progress_percent == 0
        assert record.safety_compliance is True
        assert record.end_time == NOW + timedelta(hours=1)

    def test_order(self):
        form = self.prefilled(
            OrderRecord,
            order_number="ORD-2001", client_name="ClearView Inc", client_phone="5551234",
            client_email="buy@clearview.test", client_address="9 Harbour St",
            order_details="Laminated panels", quantity="50", unit_price="25",
        )
        record = build_order(form, now=NOW)

        assert record.status == "New"
        assert record.payment_status == "Pending"
        assert record.refund_eligible is True
        assert record.tax_percent == 10.0
        assert record.tags == ["client", "new"]
        assert record.total_price == pytest.approx(1375.0)

    def test_delivery(self):
        record = build_delivery(self.prefilled(DeliveryRecord, **delivery_form()), now=NOW)

        assert record.status == "Pending"
        assert record.temperature_requirement == "Ambient"
        assert record.delivery_date == NOW + timedelta(hours=1)

    def test_initial_values_match_input_kinds(self):
        values = initial_form_values(OrderRecord, NOW)

        assert values["status"] == "New"
        assert values["refund_eligible"] is True
        assert values["order_date"] == NOW
        assert values["expected_delivery_date"] == NOW + timedelta(days=3)
        assert values["total_price"] == ""
