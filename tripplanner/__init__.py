"""
Trip planner backend.

This package contains:
- shared/: Common infrastructure (LLM client, logging, contracts)
- planner/: Prompt building, response reconciliation and the plan API
- system/: Diagnostic endpoints (root, health, completion checks)
- app.py: FastAPI application factory
- main.py: Process entry point
"""
