"""
Orchestrators for HazardWatch.

This module contains the orchestrators that coordinate
the flow between ports and adapters.
"""
from .orchestrator import Orchestrator, build_orchestrator

__all__ = ["Orchestrator", "build_orchestrator"]
