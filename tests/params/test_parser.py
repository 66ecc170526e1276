import json

import pytest

from suite_runner.errors import ParameterError
from suite_runner.params import parse_key_value, parse_params, parse_params_data
from suite_runner.params.schema import DEFAULT_PASS_THRU_DEPTH


def test_parse_params_data_defaults():
    params = parse_params_data({"path": "tests"})

    assert params.path == "tests"
    assert params.path_exclude == []
    assert params.tags_include == []
    assert params.test_parameters == {}
    assert params.test_results_enabled is False
    assert params.output_format == "junitxml"
    assert params.output_encoding == "utf-8"
    assert params.required_version is None
    assert params.minimum_version is None
    assert params.pass_thru_depth == DEFAULT_PASS_THRU_DEPTH
    assert params.check_mode is False
    assert params.results_file is None


def test_parse_params_data_coerces_values():
    params = parse_params_data({
        "path": "tests",
        "path_exclude": "a, b ,",
        "tags_include": ["smoke"],
        "test_results_enabled": "yes",
        "output_format": "JSON",
        "minimum_version": "7.4",
        "pass_thru_depth": "5",
        "check_mode": "false",
    })

    assert params.path_exclude == ["a", "b"]
    assert params.tags_include == ["smoke"]
    assert params.test_results_enabled is True
    assert params.output_format == "json"
    assert params.minimum_version == "7.4"
    assert params.pass_thru_depth == 5
    assert params.check_mode is False
    assert params.results_file == "test_results.json"


def test_output_file_enables_results():
    params = parse_params_data({"path": "tests", "output_file": "out/results.xml"})

    assert params.test_results_enabled is True
    assert params.results_file == "out/results.xml"


def test_none_values_are_dropped():
    params = parse_params_data({"path": "tests", "required_version": None})

    assert params.required_version is None


def test_missing_path_is_rejected():
    with pytest.raises(ParameterError, match="Missing required parameter 'path'"):
        parse_params_data({"tags_include": ["smoke"]})


def test_unknown_parameter_is_rejected():
    with pytest.raises(ParameterError, match="Unsupported parameters.*bogus"):
        parse_params_data({"path": "tests", "bogus": 1})


@pytest.mark.parametrize(
    "name, value",
    [
        ("path_exclude", 3),
        ("test_results_enabled", "maybe"),
        ("pass_thru_depth", "deep"),
        ("pass_thru_depth", True),
        ("test_parameters", ["a"]),
        ("output_file", {"a": 1}),
    ],
)
def test_wrong_types_are_rejected(name, value):
    with pytest.raises(ParameterError, match=name):
        parse_params_data({"path": "tests", name: value})


def test_parse_params_reads_yaml(tmp_path):
    args_file = tmp_path / "args.yml"
    args_file.write_text(
        "path: tests\n"
        "tags_exclude: [slow]\n"
        "test_parameters:\n"
        "  target: staging\n"
        "required_version: '8.0'\n",
        encoding="utf-8",
    )

    params = parse_params(args_file)

    assert params.tags_exclude == ["slow"]
    assert params.test_parameters == {"target": "staging"}
    assert params.required_version == "8.0"


def test_parse_params_reads_wrapped_json(tmp_path):
    args_file = tmp_path / "args.json"
    args_file.write_text(
        json.dumps({"module_args": {"path": "tests", "pass_thru_depth": 1}}),
        encoding="utf-8",
    )

    params = parse_params(args_file)

    assert params.path == "tests"
    assert params.pass_thru_depth == 1


def test_parse_params_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_params(tmp_path / "missing.yml")


def test_parse_params_rejects_non_mapping(tmp_path):
    args_file = tmp_path / "args.yml"
    args_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ParameterError, match="must hold a mapping"):
        parse_params(args_file)


def test_parse_params_rejects_malformed_yaml(tmp_path):
    args_file = tmp_path / "args.yml"
    args_file.write_text("path: [unclosed\n", encoding="utf-8")

    with pytest.raises(ParameterError, match="Failed to parse args file"):
        parse_params(args_file)


@pytest.mark.parametrize("name", ["required_version", "minimum_version"])
def test_unquoted_yaml_version_is_rejected(tmp_path, name):
    args_file = tmp_path / "args.yml"
    args_file.write_text(f"path: tests\n{name}: 8.10\n", encoding="utf-8")

    with pytest.raises(ParameterError, match=f"'{name}' must be a quoted version string"):
        parse_params(args_file)


def test_quoted_yaml_version_keeps_digits(tmp_path):
    args_file = tmp_path / "args.yml"
    args_file.write_text("path: tests\nrequired_version: '8.10'\n", encoding="utf-8")

    assert parse_params(args_file).required_version == "8.10"


def test_parse_key_value():
    assert parse_key_value(("target=staging", "retries=3", "flag=true", "empty=")) == {
        "target": "staging",
        "retries": 3,
        "flag": True,
        "empty": "",
    }


def test_parse_key_value_requires_separator():
    with pytest.raises(ParameterError, match="KEY=VALUE"):
        parse_key_value(("novalue",))
