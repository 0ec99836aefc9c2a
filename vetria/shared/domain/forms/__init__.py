"""Add-form validation."""

from typing import Callable, Dict, Type

from vetria.shared.domain.records import (
    BaseRecord,
    DeliveryRecord,
    MaterialRecord,
    OrderRecord,
    ProcessRecord,
    TaskRecord,
)

from .validation import (
    FormData,
    FormValidationError,
    build_delivery,
    build_material,
    build_order,
    build_process,
    build_task,
)

FORM_BUILDERS: Dict[Type[BaseRecord], Callable[..., BaseRecord]] = {
    ProcessRecord: build_process,
    MaterialRecord: build_material,
    TaskRecord: build_task,
    OrderRecord: build_order,
    DeliveryRecord: build_delivery,
}

__all__ = [
    "FormData",
    "FormValidationError",
    "FORM_BUILDERS",
    "build_process",
    "build_material",
    "build_task",
    "build_order",
    "build_delivery",
]
