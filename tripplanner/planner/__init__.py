"""
Planner: turns trip preferences into a normalized plan.

Prompt construction, the completion -> reconcile pipeline graph, JSON
extraction and plan normalization live here.
"""

from tripplanner.planner.normalizer import normalize_plan
from tripplanner.planner.response_parser import extract_json
from tripplanner.planner.service import PlanService

__all__ = ["PlanService", "extract_json", "normalize_plan"]
