"""Diagnostic endpoints: root descriptor, health and completion checks."""

from tripplanner.system.system_api import router

__all__ = ["router"]
