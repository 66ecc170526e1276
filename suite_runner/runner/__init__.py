"""Runner module - framework invocation."""

from .executor import ExecutionResult, FrameworkExecutor, RunConfig, build_marker_expression
from .result_collector import CollectedResult, CollectedTest, ResultCollector

__all__ = [
    "ExecutionResult",
    "FrameworkExecutor",
    "RunConfig",
    "build_marker_expression",
    "CollectedResult",
    "CollectedTest",
    "ResultCollector",
]
