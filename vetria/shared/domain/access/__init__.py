from .gate import (
    AccessGate,
    AccessState,
    GateStatus,
    HttpValidationProbe,
    NativeOnlyProbe,
    ValidationProbe,
)

__all__ = [
    "AccessGate",
    "AccessState",
    "GateStatus",
    "HttpValidationProbe",
    "NativeOnlyProbe",
    "ValidationProbe",
]
