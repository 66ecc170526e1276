"""CLI entry point for suite-runner.

Invoked by the orchestration host:
    suite-runner <args_file> [options]
    python -m suite_runner <args_file> [options]

The host document is the only thing written to stdout.
"""

import logging
import sys
import time
from typing import Any, Optional

import click

from . import __version__
from .errors import ParameterError, SuiteRunnerError
from .framework.locator import get_framework_info, locate_framework
from .log import get_logger, setup_logging
from .params.parser import load_args_file, parse_key_value, parse_params_data
from .params.schema import VALID_OUTPUT_FORMATS
from .params.validator import validate_params
from .reporting.json_reporter import JsonReporter
from .runner.executor import FrameworkExecutor, RunConfig

logger = get_logger(__name__)


def invoke(data: dict[str, Any]) -> dict[str, Any]:
    """Run one invocation from raw parameters and return the host document.

    Module failures (bad parameters, missing path, missing framework) come
    back as ``failed: true`` documents; failing tests do not.
    """
    reporter = JsonReporter()

    try:
        params = parse_params_data(data)
    except ParameterError as e:
        return reporter.generate_error(str(e))

    validation = validate_params(params)
    if not validation.valid:
        errors = [f"{e.path}: {e.message}" for e in validation.errors]
        return reporter.generate_error(
            validation.first_error.message,
            errors=errors if len(errors) > 1 else None,
        )

    warnings = [w.message for w in validation.warnings]
    for warning in warnings:
        logger.warning(warning)

    reporter.pass_thru_depth = params.pass_thru_depth

    try:
        framework = locate_framework(
            required_version=params.required_version,
            minimum_version=params.minimum_version,
            search_paths=params.framework_paths,
        )
    except SuiteRunnerError as e:
        return reporter.generate_error(str(e))

    config = RunConfig.from_params(params)

    if params.check_mode:
        return reporter.generate_check_mode_output(
            framework.version, config.to_args(), warnings=warnings
        )

    result = FrameworkExecutor(framework, config).execute()
    return reporter.generate_host_output(
        result.to_output(), framework.version, warnings=warnings
    )


def collect_options(
    args_file: Optional[str],
    options: dict[str, Any],
) -> dict[str, Any]:
    """Merge the args file with command line options; options win."""
    data = load_args_file(args_file) if args_file else {}

    pairs = options.pop("test_parameters", None) or ()
    if pairs:
        from_file = data.get("test_parameters") or {}
        if not isinstance(from_file, dict):
            raise ParameterError(
                f"'test_parameters' must be a mapping, got {type(from_file).__name__}"
            )
        merged = dict(from_file)
        merged.update(parse_key_value(tuple(pairs)))
        data["test_parameters"] = merged

    for name, value in options.items():
        # A bare --check flag can only switch check mode on
        if value is None or value == () or (name == "check_mode" and not value):
            continue
        data[name] = list(value) if isinstance(value, tuple) else value

    return data


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("args_file", required=False, type=click.Path(dir_okay=False))
@click.option("--path", help="File or directory to run tests against.")
@click.option("--exclude", "path_exclude", multiple=True, help="Path or glob to skip.")
@click.option("--tag", "tags_include", multiple=True, help="Only run tests with this marker.")
@click.option("--exclude-tag", "tags_exclude", multiple=True, help="Skip tests with this marker.")
@click.option("--param", "test_parameters", multiple=True, metavar="KEY=VALUE",
              help="Value exposed through the test_parameters fixture.")
@click.option("--results/--no-results", "test_results_enabled", default=None,
              help="Write a test results file.")
@click.option("--output-file", help="Test results file path.")
@click.option("--output-format", type=click.Choice(sorted(VALID_OUTPUT_FORMATS), case_sensitive=False),
              help="Test results file format.")
@click.option("--output-encoding", help="Test results file encoding.")
@click.option("--required-version", help="Exact pytest version to use.")
@click.option("--minimum-version", help="Lowest pytest version to use.")
@click.option("--depth", "pass_thru_depth", type=int, help="Nesting depth kept in output.")
@click.option("--framework-path", "framework_paths", multiple=True,
              help="Extra directory searched for pytest installs.")
@click.option("--check", "check_mode", is_flag=True,
              help="Validate and locate pytest without running tests.")
@click.option("--list-versions", is_flag=True, help="List installed pytest versions and exit.")
@click.option("--pretty", is_flag=True, help="Pretty print output.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr.")
@click.version_option(__version__, prog_name="suite-runner")
def main(args_file, list_versions, pretty, verbose, **options):
    """Run pytest for an orchestration host and print a JSON result document."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING, force_reconfigure=True)
    reporter = JsonReporter()

    if list_versions:
        info = get_framework_info(options.get("framework_paths") or None)
        click.echo(reporter.to_json_string(info, pretty=pretty))
        return

    start_time = time.time()

    try:
        data = collect_options(args_file, options)
        document = invoke(data)

    except KeyboardInterrupt:
        duration_ms = int((time.time() - start_time) * 1000)
        document = reporter.generate_error("Test run interrupted by user", duration_ms=duration_ms)
        click.echo(reporter.to_json_string(document, pretty=pretty))
        sys.exit(130)

    except (FileNotFoundError, SuiteRunnerError) as e:
        document = reporter.generate_error(str(e))

    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        duration_ms = int((time.time() - start_time) * 1000)
        document = reporter.generate_error(
            f"Unexpected error: {type(e).__name__}: {e}", duration_ms=duration_ms
        )

    click.echo(reporter.to_json_string(document, pretty=pretty))

    if document.get("failed"):
        sys.exit(1)


if __name__ == "__main__":
    main()
