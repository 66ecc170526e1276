import pytest

from suite_runner.errors import InvalidVersionError
from suite_runner.framework.version import (
    normalize,
    parse_installed_version,
    parse_version,
    versions_equal,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("8.0", (8, 0)),
        ("7.4.2", (7, 4, 2)),
        ("8.1.0.1", (8, 1, 0, 1)),
        (" 6.2 ", (6, 2)),
    ],
)
def test_parse_version(text, expected):
    assert parse_version(text) == expected


def test_parse_version_error_names_parameter():
    with pytest.raises(InvalidVersionError) as exc_info:
        parse_version("latest", "required_version")

    assert str(exc_info.value) == (
        "Value 'latest' for parameter 'required_version' is not a valid version format"
    )
    assert exc_info.value.name == "required_version"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("8.3.2", (8, 3, 2)),
        ("8.4.0.dev14+g1a2b3c", (8, 4, 0)),
        ("7.0.0rc1", (7, 0, 0)),
        ("unknown", None),
    ],
)
def test_parse_installed_version(text, expected):
    assert parse_installed_version(text) == expected


def test_trailing_zeros_do_not_matter():
    assert normalize((8, 0, 0)) == (8,)
    assert versions_equal((8, 0), (8, 0, 0))
    assert not versions_equal((8, 0), (8, 0, 1))
    assert normalize((7, 4, 0)) < normalize((7, 4, 1))
