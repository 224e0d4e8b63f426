"""Orchestrator - drives one client across several servers."""

from orchestrator.driver import AgentDriver, WorkflowStepError, format_tool_result
from orchestrator.main import run_demo

__all__ = [
    "AgentDriver",
    "WorkflowStepError",
    "format_tool_result",
    "run_demo",
]
