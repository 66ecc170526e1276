import pytest

from suite_runner.params import parse_params_data, validate_params


@pytest.fixture
def make_params(tmp_path):
    def _make(**overrides):
        data = {"path": str(tmp_path)}
        data.update(overrides)
        return parse_params_data(data)

    return _make


def test_valid_params(make_params):
    result = validate_params(make_params(tags_include=["smoke"], minimum_version="7.0"))

    assert result.valid
    assert result.errors == []
    assert str(result) == "Valid"


def test_invalid_version_format(make_params):
    result = validate_params(make_params(minimum_version="seven"))

    assert not result.valid
    assert result.first_error.path == "minimum_version"
    assert result.first_error.message == (
        "Value 'seven' for parameter 'minimum_version' is not a valid version format"
    )


@pytest.mark.parametrize("version", ["8", "8.0.0.0.1", "8.x", "v8.0", "8.0-rc1"])
def test_rejected_version_strings(make_params, version):
    result = validate_params(make_params(required_version=version))

    assert not result.valid
    assert "is not a valid version format" in result.first_error.message


def test_versions_are_mutually_exclusive(make_params):
    result = validate_params(make_params(required_version="8.0", minimum_version="7.0"))

    assert not result.valid
    assert result.first_error.message == (
        "parameters are mutually exclusive: required_version, minimum_version"
    )


def test_missing_path(tmp_path):
    missing = tmp_path / "nowhere"
    result = validate_params(parse_params_data({"path": str(missing)}))

    assert not result.valid
    assert result.first_error.message == (
        f"Cannot find file or directory: '{missing}' as it does not exist"
    )


def test_version_error_comes_before_path_error(tmp_path):
    result = validate_params(parse_params_data({
        "path": str(tmp_path / "nowhere"),
        "required_version": "bad",
    }))

    assert [e.path for e in result.errors] == ["required_version", "path"]
    assert str(result) == "Invalid: 2 errors, 0 warnings"


@pytest.mark.parametrize("tag", ["not", "has space", "1st", "a-b"])
def test_invalid_tags(make_params, tag):
    result = validate_params(make_params(tags_include=[tag]))

    assert not result.valid
    assert result.first_error.path == "tags_include[0]"


def test_tag_included_and_excluded(make_params):
    result = validate_params(make_params(tags_include=["smoke"], tags_exclude=["smoke"]))

    assert not result.valid
    assert "smoke" in result.first_error.message


def test_invalid_output_options(make_params):
    result = validate_params(make_params(output_format="nunitxml", output_encoding="klingon"))

    assert {e.path for e in result.errors} == {"output_format", "output_encoding"}


def test_negative_depth(make_params):
    result = validate_params(make_params(pass_thru_depth=-1))

    assert result.first_error.path == "pass_thru_depth"


def test_missing_results_directory_is_a_warning(make_params, tmp_path):
    result = validate_params(make_params(output_file=str(tmp_path / "new" / "out.xml")))

    assert result.valid
    assert result.warning_count == 1
    assert result.warnings[0].path == "output_file"
