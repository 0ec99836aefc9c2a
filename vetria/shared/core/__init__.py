"""
Shared Core Module
==================

Event system, configuration and cleanup registry.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

from .service_registry import register_cleanup_handler, run_cleanup

# Configuration
from .configuration import (
    ConfigManager,
    SystemConfig,
    ValidationLevel,
    get_config,
    get_config_manager,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Cleanup
    "register_cleanup_handler",
    "run_cleanup",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "ValidationLevel",
    "get_config",
    "get_config_manager",
]
