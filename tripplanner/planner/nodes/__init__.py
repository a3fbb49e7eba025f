"""Node functions for the plan pipeline graph."""

from tripplanner.planner.nodes.plan_nodes import make_completion_node, reconcile_node

__all__ = ["make_completion_node", "reconcile_node"]
