"""Host result document generator.

Builds the JSON document handed back to the orchestration host:
{
    "changed": bool,
    "failed": bool,
    "msg": str,
    "pytest_version_used": str,
    "output": { ... depth limited run result ... }
}
"""

import json
from typing import Any, Optional

from ..params.schema import DEFAULT_PASS_THRU_DEPTH
from .depth import limit_depth

VERSION_KEY = "pytest_version_used"


class JsonReporter:
    """Generates host result documents."""

    def __init__(self, pass_thru_depth: int = DEFAULT_PASS_THRU_DEPTH):
        """Initialize reporter.

        Args:
            pass_thru_depth: Container levels of the run result to keep.
        """
        self.pass_thru_depth = pass_thru_depth

    def generate_host_output(
        self,
        output: dict[str, Any],
        framework_version: str,
        changed: bool = True,
        warnings: Optional[list[str]] = None,
    ) -> dict[str, Any]:
        """Generate the result document of a completed run.

        Test failures do not fail the module; they are reported in ``msg``
        and ``output`` only.

        Args:
            output: Run result from ExecutionResult.to_output().
            framework_version: Version of the framework that ran the tests.
            changed: Whether the run counts as a change for the host.
            warnings: Validation warnings to pass on.

        Returns:
            Host result document ready for JSON serialization.
        """
        document: dict[str, Any] = {
            "changed": changed,
            "failed": False,
            "msg": summarize(output),
            VERSION_KEY: framework_version,
            "output": limit_depth(output, self.pass_thru_depth),
        }
        if warnings:
            document["warnings"] = list(warnings)
        return document

    def generate_check_mode_output(
        self,
        framework_version: str,
        args: list[str],
        warnings: Optional[list[str]] = None,
    ) -> dict[str, Any]:
        """Generate the result document of a check mode invocation."""
        document: dict[str, Any] = {
            "changed": True,
            "failed": False,
            "msg": "Check mode: tests were not run",
            VERSION_KEY: framework_version,
            "output": limit_depth({"check_mode": True, "args": args}, self.pass_thru_depth),
        }
        if warnings:
            document["warnings"] = list(warnings)
        return document

    def generate_error(self, message: str, **extra) -> dict[str, Any]:
        """Generate the result document of a module failure."""
        document: dict[str, Any] = {
            "changed": False,
            "failed": True,
            "msg": message,
        }
        for key, value in extra.items():
            if value is not None:
                document[key] = limit_depth(value, None)
        return document

    def to_json_string(self, document: dict[str, Any], pretty: bool = False) -> str:
        """Convert a document to a JSON string.

        Args:
            document: Result document.
            pretty: If True, format with indentation.
        """
        if pretty:
            return json.dumps(document, indent=2, ensure_ascii=False)
        return json.dumps(document, ensure_ascii=False)


def summarize(output: dict[str, Any]) -> str:
    """One line summary of a run, e.g. '3 passed, 1 failed in 0.42s'."""
    summary = output.get("summary") or {}
    parts = [
        f"{summary[key]} {label}"
        for key, label in (
            ("passed", "passed"),
            ("failed", "failed"),
            ("error", "errors"),
            ("skipped", "skipped"),
            ("xfailed", "xfailed"),
            ("xpassed", "xpassed"),
            ("deselected", "deselected"),
            ("collection_errors", "collection errors"),
        )
        if summary.get(key)
    ]

    message = ", ".join(parts) if parts else "no tests ran"
    duration_ms = output.get("duration_ms")
    if duration_ms is not None:
        message += f" in {duration_ms / 1000:.2f}s"
    if output.get("error"):
        message += f" ({output['error']})"
    return message
