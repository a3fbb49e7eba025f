"""
Graph construction for the plan pipeline.

Builds and compiles the LangGraph workflow that turns a prompt into a
normalized plan.
"""

from langgraph.graph import StateGraph, END

from tripplanner.planner.schemas import PlanState
from tripplanner.planner.nodes.plan_nodes import (
    RequestCompletion,
    make_completion_node,
    reconcile_node,
)


def create_plan_graph(request_completion: RequestCompletion):
    """
    Create and compile the LangGraph workflow for plan creation.

    The graph structure is:
        Entry -> completion -> reconcile -> END

    Args:
        request_completion: Function performing the retried completion call.
            Injected so tests can substitute the external API.

    Returns:
        Compiled LangGraph application ready for execution.
    """
    graph = StateGraph(PlanState)

    # Add nodes
    graph.add_node("completion", make_completion_node(request_completion))
    graph.add_node("reconcile", reconcile_node)

    # Set entry point and edges
    graph.set_entry_point("completion")
    graph.add_edge("completion", "reconcile")
    graph.add_edge("reconcile", END)

    app = graph.compile()

    return app
