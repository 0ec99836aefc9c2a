"""
Vetria Domain Layer
===================

Business logic for the glass works: record models, the Local Store, the
Access Gate, add-form validation, search and the field catalog.
"""

from vetria.shared.domain.access import AccessGate, AccessState, GateStatus
from vetria.shared.domain.store import LocalStore

__all__ = ["AccessGate", "AccessState", "GateStatus", "LocalStore"]
