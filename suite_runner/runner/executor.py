"""Framework executor - runs pytest in process for one invocation.

Coordinates the run:
1. Derive the framework configuration from the parameters
2. Invoke pytest with the result collector attached
3. Write the results file if requested
4. Return the run result for reporting
"""

import contextlib
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..framework.locator import LocatedFramework
from ..log import get_logger
from ..params.schema import ModuleParams, OutputFormat
from ..reporting.results_file import reencode_file, write_json_results
from .result_collector import CollectedResult, ResultCollector, make_parameters_plugin

logger = get_logger(__name__)

_GLOB_CHARS = set("*?[")

# The wrapper must not leave a .pytest_cache behind in the target
DEFAULT_FLAGS = ("-p", "no:cacheprovider")


@dataclass
class RunConfig:
    """Framework configuration derived from the host parameters."""
    path: Path
    ignore: list[str] = field(default_factory=list)
    ignore_glob: list[str] = field(default_factory=list)
    marker_expression: Optional[str] = None
    test_parameters: dict[str, Any] = field(default_factory=dict)
    results_file: Optional[Path] = None
    output_format: str = OutputFormat.JUNITXML.value
    output_encoding: str = "utf-8"
    flags: list[str] = field(default_factory=lambda: list(DEFAULT_FLAGS))

    @classmethod
    def from_params(cls, params: ModuleParams) -> "RunConfig":
        ignore: list[str] = []
        ignore_glob: list[str] = []
        for exclude in params.path_exclude:
            if _GLOB_CHARS & set(exclude):
                ignore_glob.append(exclude)
            else:
                ignore.append(str(Path(exclude).expanduser()))

        results_file = params.results_file
        return cls(
            path=Path(params.path).expanduser(),
            ignore=ignore,
            ignore_glob=ignore_glob,
            marker_expression=build_marker_expression(
                params.tags_include, params.tags_exclude
            ),
            test_parameters=dict(params.test_parameters),
            results_file=Path(results_file).expanduser() if results_file else None,
            output_format=params.output_format,
            output_encoding=params.output_encoding,
        )

    @property
    def junitxml_file(self) -> Optional[Path]:
        if self.results_file and self.output_format == OutputFormat.JUNITXML.value:
            return self.results_file
        return None

    def to_args(self) -> list[str]:
        """Build the pytest command line arguments."""
        args = list(self.flags)
        for path in self.ignore:
            args.append(f"--ignore={path}")
        for pattern in self.ignore_glob:
            args.append(f"--ignore-glob={pattern}")
        if self.marker_expression:
            args.extend(["-m", self.marker_expression])
        if self.junitxml_file:
            args.append(f"--junitxml={self.junitxml_file}")
        args.append(str(self.path))
        return args


def build_marker_expression(include: list[str], exclude: list[str]) -> Optional[str]:
    """Build a -m expression such as '(a or b) and not (c or d)'."""
    parts = []
    if include:
        parts.append(f"({' or '.join(include)})")
    if exclude:
        parts.append(f"not ({' or '.join(exclude)})")
    return " and ".join(parts) or None


@dataclass
class ExecutionResult:
    """Complete result of a framework run."""
    framework_version: str
    args: list[str] = field(default_factory=list)
    exit_code: int = 0
    exit_status: str = "OK"
    collected: CollectedResult = field(default_factory=CollectedResult)
    duration_ms: int = 0
    results_file: Optional[str] = None
    error: Optional[str] = None

    @property
    def tests_passed(self) -> bool:
        return self.exit_code == 0 and not self.collected.has_failures

    def to_output(self) -> dict[str, Any]:
        """Run result as plain data, before depth limiting."""
        return {
            "exit_code": self.exit_code,
            "exit_status": self.exit_status,
            "passed": self.tests_passed,
            "args": self.args,
            "summary": self.collected.summary,
            "tests": self.collected.tests,
            "collection_errors": self.collected.collection_errors,
            "duration_ms": self.duration_ms,
            "results_file": self.results_file,
            "error": self.error,
        }


class FrameworkExecutor:
    """Runs the imported framework against the configured path."""

    def __init__(self, framework: LocatedFramework, config: RunConfig):
        """Initialize framework executor.

        Args:
            framework: The located and imported pytest module.
            config: Framework configuration for this run.
        """
        self.framework = framework
        self.config = config

    def execute(self) -> ExecutionResult:
        """Run the framework and collect its results.

        Failing tests are part of the result; only problems writing the
        results file are reported through ``error``.
        """
        start_time = time.time()
        args = self.config.to_args()
        collector = ResultCollector()
        plugins = [
            collector,
            make_parameters_plugin(self.framework.module, self.config.test_parameters),
        ]

        logger.info("Running %s %s", self.framework.install.location, " ".join(args))

        # stdout carries the host document, so the framework reports to stderr
        with contextlib.redirect_stdout(sys.stderr):
            exit_code = self.framework.module.main(args, plugins=plugins)

        result = ExecutionResult(
            framework_version=self.framework.version,
            args=args,
            exit_code=int(exit_code),
            exit_status=self._exit_status_name(exit_code),
            collected=collector.result,
        )

        result.duration_ms = int((time.time() - start_time) * 1000)

        if self.config.results_file:
            try:
                written = self._write_results_file(result)
                result.results_file = str(written) if written else None
            except (OSError, UnicodeError, LookupError) as e:
                result.error = f"Failed to write results file: {e}"
                logger.warning(result.error)

        logger.info(
            "Finished with exit status %s (%s)", result.exit_code, result.exit_status
        )
        return result

    def _write_results_file(self, result: ExecutionResult) -> Optional[Path]:
        path = self.config.results_file
        if self.config.output_format == OutputFormat.JUNITXML.value:
            # Not written when the session aborted before collection
            if not path.exists():
                return None
            # pytest writes JUnit XML as UTF-8
            reencode_file(path, self.config.output_encoding)
            return path

        return write_json_results(
            result.to_output(),
            path,
            framework_version=result.framework_version,
            encoding=self.config.output_encoding,
        )

    def _exit_status_name(self, exit_code: Any) -> str:
        try:
            return self.framework.module.ExitCode(int(exit_code)).name
        except (AttributeError, ValueError):
            return "UNKNOWN"

