"""Parameter data models for suite-runner.

Defines the flat parameter set handed over by the orchestration host.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional


class OutputFormat(str, Enum):
    """Supported test results file formats."""
    JUNITXML = "junitxml"
    JSON = "json"


VALID_OUTPUT_FORMATS = {e.value for e in OutputFormat}

DEFAULT_OUTPUT_FILES = {
    OutputFormat.JUNITXML.value: "test_results.xml",
    OutputFormat.JSON.value: "test_results.json",
}
DEFAULT_OUTPUT_ENCODING = "utf-8"
DEFAULT_PASS_THRU_DEPTH = 4

LIST_PARAMS = ("path_exclude", "tags_include", "tags_exclude", "framework_paths")
BOOL_PARAMS = ("test_results_enabled", "check_mode")
STR_PARAMS = (
    "path",
    "output_file",
    "output_format",
    "output_encoding",
    "required_version",
    "minimum_version",
)


@dataclass
class ModuleParams:
    """Parameters of a single invocation."""
    path: str
    path_exclude: list[str] = field(default_factory=list)
    tags_include: list[str] = field(default_factory=list)
    tags_exclude: list[str] = field(default_factory=list)
    test_parameters: dict[str, Any] = field(default_factory=dict)
    test_results_enabled: bool = False
    output_file: Optional[str] = None
    output_format: str = OutputFormat.JUNITXML.value
    output_encoding: str = DEFAULT_OUTPUT_ENCODING
    required_version: Optional[str] = None
    minimum_version: Optional[str] = None
    pass_thru_depth: int = DEFAULT_PASS_THRU_DEPTH
    framework_paths: list[str] = field(default_factory=list)
    check_mode: bool = False

    def __post_init__(self):
        self.output_format = self.output_format.lower()
        # Naming a results file is enough to ask for one
        if self.output_file:
            self.test_results_enabled = True

    @property
    def results_file(self) -> Optional[str]:
        """Path of the results file, or None when results are disabled."""
        if not self.test_results_enabled:
            return None
        return self.output_file or DEFAULT_OUTPUT_FILES.get(
            self.output_format, DEFAULT_OUTPUT_FILES[OutputFormat.JUNITXML.value]
        )

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    def to_dict(self) -> dict[str, Any]:
        """Convert parameters to a dictionary for logging and reporting."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of parameter validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def first_error(self) -> Optional[ValidationError]:
        return self.errors[0] if self.errors else None

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
