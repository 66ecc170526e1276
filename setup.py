"""Setup configuration for suite-runner."""

from setuptools import setup, find_packages

setup(
    name="suite-runner",
    version="0.1.0",
    description="Host-invoked pytest wrapper with version pinning and JSON results",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "pytest": ["pytest>=7.0"],
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "suite-runner=suite_runner.cli:main",
        ],
    },
)
