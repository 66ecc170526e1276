"""Params module - host parameter parsing and validation."""

from .schema import (
    ModuleParams,
    OutputFormat,
    ValidationError,
    ValidationResult,
)
from .parser import parse_key_value, parse_params, parse_params_data
from .validator import validate_params

__all__ = [
    "ModuleParams",
    "OutputFormat",
    "ValidationError",
    "ValidationResult",
    "parse_key_value",
    "parse_params",
    "parse_params_data",
    "validate_params",
]
