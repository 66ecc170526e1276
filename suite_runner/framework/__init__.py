"""Framework module - locating and importing the test framework."""

from .locator import (
    FRAMEWORK_NAME,
    FrameworkInstall,
    LocatedFramework,
    find_installs,
    get_framework_info,
    import_framework,
    locate_framework,
    select_install,
)
from .version import parse_installed_version, parse_version

__all__ = [
    "FRAMEWORK_NAME",
    "FrameworkInstall",
    "LocatedFramework",
    "find_installs",
    "get_framework_info",
    "import_framework",
    "locate_framework",
    "select_install",
    "parse_installed_version",
    "parse_version",
]
