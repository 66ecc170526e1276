"""Parameter validator for suite-runner.

Validates parsed ModuleParams objects before the framework is touched.
Errors are listed in the order the host should see them: version format,
then target path, then the remaining options.
"""

import codecs
import re
from pathlib import Path

from ..errors import InvalidVersionError, PathNotFoundError
from ..framework.version import parse_version
from .schema import (
    VALID_OUTPUT_FORMATS,
    ModuleParams,
    ValidationError,
    ValidationResult,
)

_TAG_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# Words with a meaning of their own in a marker expression
_RESERVED_TAGS = {"and", "or", "not", "True", "False", "None"}


def validate_params(params: ModuleParams) -> ValidationResult:
    """Validate a parsed ModuleParams object.

    Checks:
    - required_version / minimum_version are exclusive and well formed
    - the target path exists
    - tag names, results file options and pass_thru_depth

    Args:
        params: Parsed ModuleParams to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    _validate_versions(params, errors)
    _validate_path(params, errors)
    _validate_tags(params, errors)
    _validate_results(params, errors, warnings)

    if params.pass_thru_depth < 0:
        errors.append(ValidationError(
            path="pass_thru_depth",
            message=f"'pass_thru_depth' must not be negative, got {params.pass_thru_depth}.",
        ))

    for key in params.test_parameters:
        if not isinstance(key, str):
            errors.append(ValidationError(
                path="test_parameters",
                message=f"'test_parameters' keys must be strings, got {key!r}.",
            ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_versions(params: ModuleParams, errors: list[ValidationError]) -> None:
    if params.required_version and params.minimum_version:
        errors.append(ValidationError(
            path="required_version",
            message="parameters are mutually exclusive: required_version, minimum_version",
        ))

    for name in ("required_version", "minimum_version"):
        value = getattr(params, name)
        if not value:
            continue
        try:
            parse_version(value, name)
        except InvalidVersionError as e:
            errors.append(ValidationError(path=name, message=str(e)))


def _validate_path(params: ModuleParams, errors: list[ValidationError]) -> None:
    if not Path(params.path).expanduser().exists():
        errors.append(ValidationError(
            path="path",
            message=str(PathNotFoundError(params.path)),
        ))

    for exclude in params.path_exclude:
        if not exclude:
            errors.append(ValidationError(
                path="path_exclude",
                message="'path_exclude' entries must not be empty.",
            ))


def _validate_tags(params: ModuleParams, errors: list[ValidationError]) -> None:
    for name in ("tags_include", "tags_exclude"):
        for i, tag in enumerate(getattr(params, name)):
            if not _TAG_PATTERN.match(tag) or tag in _RESERVED_TAGS:
                errors.append(ValidationError(
                    path=f"{name}[{i}]",
                    message=f"Invalid tag '{tag}'. Tags must be valid marker names.",
                ))

    overlap = sorted(set(params.tags_include) & set(params.tags_exclude))
    if overlap:
        errors.append(ValidationError(
            path="tags_exclude",
            message=f"Tags both included and excluded: {', '.join(overlap)}",
        ))


def _validate_results(
    params: ModuleParams,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    if params.output_format not in VALID_OUTPUT_FORMATS:
        errors.append(ValidationError(
            path="output_format",
            message=f"Invalid output_format '{params.output_format}'. Must be one of: {', '.join(sorted(VALID_OUTPUT_FORMATS))}",
        ))

    try:
        codecs.lookup(params.output_encoding)
    except LookupError:
        errors.append(ValidationError(
            path="output_encoding",
            message=f"Unknown output_encoding '{params.output_encoding}'.",
        ))

    if params.results_file:
        parent = Path(params.results_file).expanduser().parent
        if not parent.exists():
            warnings.append(ValidationError(
                path="output_file",
                message=f"Directory '{parent}' does not exist and will be created.",
                severity="warning",
            ))
