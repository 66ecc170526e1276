"""Result collector for suite-runner.

A pytest plugin that records test reports as the framework runs them.
Hooks are plain methods, so this module never imports the framework
itself; the framework is imported at the version the host asked for.
"""

import copy
import time
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Optional

OUTCOMES = ("passed", "failed", "skipped", "error", "xfailed", "xpassed")


@dataclass
class CollectedTest:
    """Outcome of a single test item."""
    nodeid: str
    outcome: str = "passed"
    duration: float = 0.0
    markers: list[str] = field(default_factory=list)
    message: Optional[str] = None


@dataclass
class CollectionError:
    """A file or node that failed to collect."""
    nodeid: str
    message: str


@dataclass
class CollectedResult:
    """Aggregated results of one framework session."""
    tests: list[CollectedTest] = field(default_factory=list)
    collection_errors: list[CollectionError] = field(default_factory=list)
    collected: int = 0
    deselected: int = 0
    duration: float = 0.0

    def get_test(self, nodeid: str) -> Optional[CollectedTest]:
        for test in self.tests:
            if test.nodeid == nodeid:
                return test
        return None

    def count(self, outcome: str) -> int:
        return sum(1 for t in self.tests if t.outcome == outcome)

    @property
    def summary(self) -> dict[str, int]:
        """Counts per outcome plus totals."""
        counts = {outcome: self.count(outcome) for outcome in OUTCOMES}
        counts["total"] = len(self.tests)
        counts["deselected"] = self.deselected
        counts["collection_errors"] = len(self.collection_errors)
        return counts

    @property
    def has_failures(self) -> bool:
        return bool(self.collection_errors) or any(
            t.outcome in ("failed", "error") for t in self.tests
        )


class ResultCollector:
    """Collects test reports from a running pytest session."""

    def __init__(self):
        self.result = CollectedResult()
        self._markers: dict[str, list[str]] = {}
        self._start_time: Optional[float] = None

    def pytest_sessionstart(self, session) -> None:
        self._start_time = time.time()

    def pytest_collection_modifyitems(self, session, config, items) -> None:
        for item in items:
            self._markers[item.nodeid] = sorted(
                {marker.name for marker in item.iter_markers()}
            )

    def pytest_deselected(self, items) -> None:
        self.result.deselected += len(items)

    def pytest_collectreport(self, report) -> None:
        if report.failed:
            self.result.collection_errors.append(CollectionError(
                nodeid=report.nodeid,
                message=report.longreprtext,
            ))

    def pytest_runtest_logreport(self, report) -> None:
        test = self.result.get_test(report.nodeid)
        if test is None:
            test = CollectedTest(
                nodeid=report.nodeid,
                markers=self._markers.get(report.nodeid, []),
            )
            self.result.tests.append(test)

        test.duration += report.duration or 0.0
        outcome = _outcome_of(report)
        if outcome is None:
            return

        # A failing teardown turns a passed test into an error
        if report.when == "teardown" and test.outcome != "passed":
            return

        test.outcome = outcome
        test.message = _message_of(report, outcome)

    def pytest_sessionfinish(self, session, exitstatus) -> None:
        self.result.collected = session.testscollected
        if self._start_time is not None:
            self.result.duration = time.time() - self._start_time


def _outcome_of(report) -> Optional[str]:
    """Map a phase report to a test outcome; None leaves the outcome as is."""
    wasxfail = hasattr(report, "wasxfail")

    if report.when == "call":
        if wasxfail:
            return "xfailed" if report.skipped else "xpassed"
        return report.outcome

    # setup and teardown
    if report.failed:
        return "error"
    if report.skipped:
        return "xfailed" if wasxfail else "skipped"
    return None


def _message_of(report, outcome: str) -> Optional[str]:
    if outcome == "skipped":
        longrepr = report.longrepr
        if isinstance(longrepr, tuple) and len(longrepr) == 3:
            return str(longrepr[2])
        return str(longrepr) if longrepr else None
    if outcome == "xfailed":
        return report.wasxfail or None
    if outcome in ("failed", "error"):
        return report.longreprtext
    return None


def make_parameters_plugin(framework: ModuleType, test_parameters: dict[str, Any]):
    """Build a plugin exposing the host's test_parameters as a fixture.

    Args:
        framework: The imported pytest module.
        test_parameters: Values handed over by the host.
    """

    class ParametersPlugin:
        @framework.fixture(scope="session")
        def test_parameters(self) -> dict[str, Any]:
            return copy.deepcopy(test_parameters)

    return ParametersPlugin()
