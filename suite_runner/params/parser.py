"""Args file parser for suite-runner.

Parses the YAML or JSON args file written by the host into a ModuleParams
object. yaml.safe_load reads both formats.
"""

from pathlib import Path
from typing import Any, Union

import yaml

from ..errors import ParameterError
from .schema import BOOL_PARAMS, LIST_PARAMS, STR_PARAMS, ModuleParams

VERSION_PARAMS = ("required_version", "minimum_version")

# Hosts may wrap the parameters in a single top-level key
ARGS_WRAPPER_KEY = "module_args"

_TRUE_STRINGS = {"yes", "true", "on", "1", "y"}
_FALSE_STRINGS = {"no", "false", "off", "0", "n"}


def parse_params(file_path: Union[str, Path]) -> ModuleParams:
    """Parse an args file into a ModuleParams object.

    Args:
        file_path: Path to the YAML or JSON args file.

    Returns:
        Parsed ModuleParams object.

    Raises:
        FileNotFoundError: If the args file doesn't exist.
        ParameterError: If the file is malformed or holds invalid parameters.
    """
    return parse_params_data(load_args_file(file_path), source=str(file_path))


def load_args_file(file_path: Union[str, Path]) -> dict[str, Any]:
    """Load the raw parameter mapping from an args file."""
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Args file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParameterError(f"Failed to parse args file {file_path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ParameterError(
            f"Args file must hold a mapping, got {type(data).__name__} in {file_path}"
        )

    if set(data) == {ARGS_WRAPPER_KEY}:
        data = data[ARGS_WRAPPER_KEY] or {}
        if not isinstance(data, dict):
            raise ParameterError(f"'{ARGS_WRAPPER_KEY}' must be a mapping in {file_path}")

    return data


def parse_params_data(data: dict, source: str = "<inline>") -> ModuleParams:
    """Build ModuleParams from a mapping of raw values.

    Args:
        data: Dictionary with parameter values. None values are dropped.
        source: Source identifier for error messages.

    Raises:
        ParameterError: If keys are unknown, missing or of the wrong type.
    """
    if not isinstance(data, dict):
        raise ParameterError(f"Parameters must be a mapping, got {type(data).__name__}")

    data = {k: v for k, v in data.items() if v is not None}

    unknown = sorted(set(data) - ModuleParams.field_names())
    if unknown:
        raise ParameterError(
            f"Unsupported parameters in {source}: {', '.join(unknown)}"
        )

    if "path" not in data:
        raise ParameterError(f"Missing required parameter 'path' in {source}")

    values: dict[str, Any] = {}
    for name, value in data.items():
        if name in LIST_PARAMS:
            values[name] = _to_list(name, value)
        elif name in BOOL_PARAMS:
            values[name] = _to_bool(name, value)
        elif name in STR_PARAMS:
            values[name] = _to_str(name, value)
        elif name == "pass_thru_depth":
            values[name] = _to_int(name, value)
        elif name == "test_parameters":
            if not isinstance(value, dict):
                raise ParameterError(
                    f"'test_parameters' must be a mapping, got {type(value).__name__}"
                )
            values[name] = dict(value)

    return ModuleParams(**values)


def parse_key_value(items: tuple[str, ...]) -> dict[str, Any]:
    """Parse KEY=VALUE pairs; values are read as YAML scalars."""
    result: dict[str, Any] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ParameterError(f"Expected KEY=VALUE, got '{item}'")
        result[key.strip()] = yaml.safe_load(raw) if raw else ""
    return result


def _to_list(name: str, value: Any) -> list[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    raise ParameterError(f"'{name}' must be a list, got {type(value).__name__}")


def _to_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ParameterError(f"'{name}' must be a boolean, got '{value}'")


def _to_str(name: str, value: Any) -> str:
    # A float version has already lost digits: 8.10 reads as 8.1
    if name in VERSION_PARAMS and isinstance(value, float):
        raise ParameterError(
            f"'{name}' must be a quoted version string, got the number {value}"
        )
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise ParameterError(f"'{name}' must be a string, got {type(value).__name__}")


def _to_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ParameterError(f"'{name}' must be an integer, got '{value}'")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ParameterError(f"'{name}' must be an integer, got '{value}'") from None
