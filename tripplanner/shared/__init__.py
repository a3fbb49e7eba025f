"""
Shared infrastructure for the planner.

Modules:
- llm: OpenAI completion client with retry logic
- logging: Text and JSON logging setup
- contracts: Plan/Stop output contracts
"""

from tripplanner.shared.llm.client import CompletionClient, call_with_retry
from tripplanner.shared.logging.config import setup_logging, log_event

__all__ = [
    "CompletionClient",
    "call_with_retry",
    "setup_logging",
    "log_event",
]
