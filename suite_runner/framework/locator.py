"""Framework locator for suite-runner.

Finds installed pytest distributions and imports the one matching the
requested version constraint.
"""

import importlib
import importlib.metadata
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Iterable, Optional

from ..errors import FrameworkImportError, FrameworkNotFoundError
from ..log import get_logger
from .version import (
    VersionTuple,
    normalize,
    parse_installed_version,
    parse_version,
    versions_equal,
)

FRAMEWORK_NAME = "pytest"
FRAMEWORK_MODULE = "pytest"

logger = get_logger(__name__)


@dataclass(frozen=True)
class FrameworkInstall:
    """An installed framework distribution."""
    version_string: str
    version: VersionTuple
    location: Path


def find_installs(search_paths: Optional[Iterable[str]] = None) -> list[FrameworkInstall]:
    """Find installed framework distributions.

    Searches in order:
    1. The given search paths (framework_paths parameter)
    2. sys.path

    Returns:
        Installs ordered from highest to lowest version, one per location.
    """
    paths = [str(Path(p).expanduser()) for p in (search_paths or [])]
    paths.extend(p for p in sys.path if p not in paths)

    installs: list[FrameworkInstall] = []
    seen: set[Path] = set()

    for dist in importlib.metadata.distributions(name=FRAMEWORK_NAME, path=paths):
        version_string = dist.version or ""
        version = parse_installed_version(version_string)
        if version is None:
            logger.debug("Skipping %s with unparsable version '%s'", FRAMEWORK_NAME, version_string)
            continue

        location = Path(str(dist.locate_file(""))).resolve()
        if location in seen:
            continue
        seen.add(location)

        logger.debug("Found %s %s at %s", FRAMEWORK_NAME, version_string, location)
        installs.append(FrameworkInstall(version_string, version, location))

    # sorted() is stable, so equal versions keep search order
    return sorted(installs, key=lambda i: normalize(i.version), reverse=True)


def select_install(
    installs: list[FrameworkInstall],
    required_version: Optional[str] = None,
    minimum_version: Optional[str] = None,
) -> FrameworkInstall:
    """Pick the install satisfying the version constraint.

    Args:
        installs: Candidate installs, highest version first.
        required_version: Exact version to match.
        minimum_version: Lowest acceptable version.

    Raises:
        InvalidVersionError: If a version string does not parse.
        FrameworkNotFoundError: If no install matches.
    """
    if required_version:
        wanted = parse_version(required_version, "required_version")
        for install in installs:
            if versions_equal(install.version, wanted):
                return install
        raise FrameworkNotFoundError(
            f"{FRAMEWORK_NAME} version {required_version} is not installed"
        )

    if minimum_version:
        lowest = normalize(parse_version(minimum_version, "minimum_version"))
        for install in installs:
            if normalize(install.version) >= lowest:
                return install
        raise FrameworkNotFoundError(
            f"{FRAMEWORK_NAME} version >= {minimum_version} is not installed"
        )

    if not installs:
        raise FrameworkNotFoundError(f"{FRAMEWORK_NAME} is not installed")

    return installs[0]


def import_framework(install: FrameworkInstall) -> ModuleType:
    """Import the framework from the install's location.

    A framework module already loaded in this process cannot be replaced;
    it is reused when its version matches and rejected otherwise.

    Raises:
        FrameworkImportError: If the import fails or loads another version.
    """
    loaded = sys.modules.get(FRAMEWORK_MODULE)
    if loaded is not None:
        loaded_string = getattr(loaded, "__version__", "")
        loaded_version = parse_installed_version(loaded_string)
        if loaded_version is not None and versions_equal(loaded_version, install.version):
            return loaded
        raise FrameworkImportError(
            f"Cannot import {FRAMEWORK_NAME} {install.version_string}: "
            f"version {loaded_string or 'unknown'} is already loaded"
        )

    location = str(install.location)
    if location in sys.path:
        sys.path.remove(location)
    sys.path.insert(0, location)
    importlib.invalidate_caches()

    try:
        module = importlib.import_module(FRAMEWORK_MODULE)
    except ImportError as e:
        raise FrameworkImportError(
            f"Failed to import {FRAMEWORK_NAME} {install.version_string} "
            f"from {location}: {e}"
        ) from e

    imported_string = getattr(module, "__version__", "")
    imported_version = parse_installed_version(imported_string)
    if imported_version is None or not versions_equal(imported_version, install.version):
        raise FrameworkImportError(
            f"Imported {FRAMEWORK_NAME} {imported_string or 'unknown'} "
            f"instead of {install.version_string} from {location}"
        )

    logger.info("Imported %s %s from %s", FRAMEWORK_NAME, imported_string, location)
    return module


@dataclass
class LocatedFramework:
    """The imported framework and where it came from."""
    module: ModuleType
    install: FrameworkInstall

    @property
    def version(self) -> str:
        return self.install.version_string


def locate_framework(
    required_version: Optional[str] = None,
    minimum_version: Optional[str] = None,
    search_paths: Optional[Iterable[str]] = None,
) -> LocatedFramework:
    """Find, select and import the framework in one step.

    Raises:
        InvalidVersionError, FrameworkNotFoundError, FrameworkImportError
    """
    installs = find_installs(search_paths)
    install = select_install(installs, required_version, minimum_version)
    return LocatedFramework(module=import_framework(install), install=install)


def get_framework_info(search_paths: Optional[Iterable[str]] = None) -> dict:
    """Get installed framework versions without importing anything.

    Returns:
        Dictionary with install status and the installs found.
    """
    installs = find_installs(search_paths)
    return {
        "found": bool(installs),
        "installs": [
            {"version": i.version_string, "location": str(i.location)}
            for i in installs
        ],
    }
