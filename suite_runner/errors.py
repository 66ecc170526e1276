"""Exceptions raised by suite-runner.

Every module-level failure reported to the host derives from
SuiteRunnerError. Test failures are never raised; they travel in the
result payload.
"""


class SuiteRunnerError(Exception):
    """Base class for failures reported to the host as ``failed: true``."""


class ParameterError(SuiteRunnerError):
    """The parameter set is malformed (unknown key, wrong type, conflict)."""


class InvalidVersionError(ParameterError):
    """A version parameter does not parse."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(
            f"Value '{value}' for parameter '{name}' is not a valid version format"
        )


class PathNotFoundError(SuiteRunnerError):
    """The target path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Cannot find file or directory: '{path}' as it does not exist"
        )


class FrameworkNotFoundError(SuiteRunnerError):
    """No installed framework satisfies the version constraint."""


class FrameworkImportError(SuiteRunnerError):
    """The selected framework install could not be imported."""
