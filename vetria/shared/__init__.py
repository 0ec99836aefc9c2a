"""
Vetria Shared Kernel
====================

Business logic and infrastructure used by the application shell.

Architecture:
- core: EventBus, event topics, configuration, cleanup registry
- infrastructure: Technical adapters (DuckDB key-value storage)
- domain: Business logic (records, Local Store, Access Gate, forms, search)
"""

__all__ = []
