"""Session state for the Flet shell.

Architecture:
- AppState: owns the EventBus, Local Store and Access Gate for one session
  and is passed explicitly to every controller.
"""

from .app_state import AppState, build_probe

__all__ = ["AppState", "build_probe"]
