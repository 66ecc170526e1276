"""suite-runner: run pytest on behalf of an orchestration host."""

__version__ = "0.1.0"
