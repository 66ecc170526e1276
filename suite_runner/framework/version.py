"""Version string handling for framework selection."""

import re
from typing import Optional, Tuple

from ..errors import InvalidVersionError

VersionTuple = Tuple[int, ...]

# Major.Minor with up to two more numeric components
_VERSION_PATTERN = re.compile(r"^\d+(\.\d+){1,3}$")
# Leading release numbers of an installed version, e.g. "8.3.2" in "8.3.2.dev14"
_RELEASE_PATTERN = re.compile(r"^(\d+(?:\.\d+)*)")


def parse_version(value: str, name: str = "version") -> VersionTuple:
    """Parse a user supplied version string into an int tuple.

    Args:
        value: Version string such as '8.0' or '7.4.2'.
        name: Parameter name used in the error message.

    Raises:
        InvalidVersionError: If the string is not 2-4 dot separated integers.
    """
    text = str(value).strip()
    if not _VERSION_PATTERN.match(text):
        raise InvalidVersionError(name, str(value))
    return tuple(int(part) for part in text.split("."))


def parse_installed_version(version_string: str) -> Optional[VersionTuple]:
    """Parse an installed distribution version, ignoring pre/dev/local suffixes."""
    match = _RELEASE_PATTERN.match(version_string.strip())
    if match:
        return tuple(int(part) for part in match.group(1).split("."))
    return None


def normalize(version: VersionTuple) -> VersionTuple:
    """Drop trailing zero components so that 8.0 == 8.0.0."""
    parts = list(version)
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def versions_equal(left: VersionTuple, right: VersionTuple) -> bool:
    return normalize(left) == normalize(right)
