"""Graph construction for the plan pipeline."""

from tripplanner.planner.graph.build import create_plan_graph

__all__ = ["create_plan_graph"]
