"""Output contracts shared between the planner and the API layer."""

from tripplanner.shared.contracts.plan_output import Plan, Stop

__all__ = ["Plan", "Stop"]
