"""
Pipeline module for the motion monitor.

The pipeline orchestrates the per-frame flow:
- Frame acquisition from observation sources
- Normalization and motion detection
- Box overlays and display
"""

from .engine import (
    PipelineEngine,
    PipelineSettings,
    PipelineStats,
    RunOutcome,
    RunResult,
    create_engine_from_config,
)

__all__ = [
    "PipelineEngine",
    "PipelineSettings",
    "PipelineStats",
    "RunOutcome",
    "RunResult",
    "create_engine_from_config",
]
