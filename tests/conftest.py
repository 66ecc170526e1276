"""Shared pytest configuration and fixtures for the suite-runner tests.

This module provides:
- Throwaway test suites written into tmp_path
- The running pytest wrapped as a located framework
- Cleanup of suite modules and log handlers between tests
"""
import logging
import sys
import textwrap
from pathlib import Path

import pytest

# Add the project root to the path so tests can import suite_runner
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from suite_runner.framework.locator import FrameworkInstall, LocatedFramework  # noqa: E402
from suite_runner.framework.version import parse_installed_version  # noqa: E402


SAMPLE_SUITE = '''
import pytest


@pytest.mark.smoke
def test_passes():
    assert 1 + 1 == 2


@pytest.mark.slow
def test_fails():
    assert "left" == "right"


@pytest.mark.skip(reason="not today")
def test_skipped():
    pass


@pytest.mark.xfail(reason="known bug")
def test_expected_failure():
    assert False


def test_uses_parameters(test_parameters):
    assert test_parameters.get("target", "unset") in ("unset", "staging")
'''


@pytest.fixture
def write_suite(tmp_path):
    """Write test modules into a fresh directory and return its path."""
    suite_dir = tmp_path / "suite"
    suite_dir.mkdir()

    def _write(files: dict) -> Path:
        for name, content in files.items():
            path = suite_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return suite_dir

    return _write


@pytest.fixture
def sample_suite(write_suite, request):
    """A suite with one passing, failing, skipped, xfailed and parameter test."""
    # Unique module names keep nested runs from sharing sys.modules entries
    name = f"test_sample_{request.node.name.replace('[', '_').replace(']', '_').replace('-', '_')}.py"
    return write_suite({name: SAMPLE_SUITE})


@pytest.fixture
def located_pytest():
    """The already imported pytest wrapped as a located framework."""
    install = FrameworkInstall(
        version_string=pytest.__version__,
        version=parse_installed_version(pytest.__version__),
        location=Path(pytest.__file__).resolve().parent.parent,
    )
    return LocatedFramework(module=pytest, install=install)


@pytest.fixture
def framework_release():
    """Release part of the running pytest version, e.g. '8.3.2'."""
    return ".".join(str(p) for p in parse_installed_version(pytest.__version__))


@pytest.fixture(autouse=True)
def forget_suite_modules(tmp_path):
    """Drop modules imported from tmp_path by nested framework runs."""
    yield
    root = str(tmp_path)
    for name, module in list(sys.modules.items()):
        module_file = getattr(module, "__file__", None) or ""
        if module_file.startswith(root):
            del sys.modules[name]


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers bound to streams that close with the test."""
    yield
    root_logger = logging.getLogger("suite_runner")
    root_logger.handlers.clear()
    root_logger.propagate = True
