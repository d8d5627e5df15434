from __future__ import annotations

import pytest

from monocreate.errors import InvalidPackageNameError
from monocreate.naming import (
    require_valid_name,
    scoped_name,
    to_code_identifier,
    validate_package_name,
)


@pytest.mark.parametrize(
    "name",
    ["widgets", "json-rpc", "some.package", "a1", "under_score-ok", "x" * 214, "@scope/pkg"],
)
def test_valid_names_have_no_violations(name: str):
    validation = validate_package_name(name)
    assert validation.valid_for_new_packages
    assert validation.violations == []


@pytest.mark.parametrize(
    "name, message",
    [
        ("", "name length must be greater than zero"),
        (".hidden", "name cannot start with a period"),
        ("_private", "name cannot start with an underscore"),
        (" padded", "name cannot contain leading or trailing spaces"),
        ("node_modules", "node_modules is a blacklisted name"),
        ("favicon.ico", "favicon.ico is a blacklisted name"),
        ("fs", "fs is a core module name"),
        ("HTTP", "HTTP is a core module name"),
        ("x" * 215, "name can no longer contain more than 214 characters"),
        ("Widgets", "name can no longer contain capital letters"),
        ("wid*gets", 'name can no longer contain special characters ("~\'!()*")'),
        ("wid gets", "name can only contain URL-friendly characters"),
        ("café", "name can only contain URL-friendly characters"),
    ],
)
def test_each_rule_reports_its_violation(name: str, message: str):
    validation = validate_package_name(name)
    assert not validation.valid_for_new_packages
    assert message in validation.violations


def test_all_violations_are_reported_together():
    validation = validate_package_name("Invalid Name!")

    assert validation.errors == ["name can only contain URL-friendly characters"]
    assert validation.warnings == [
        "name can no longer contain capital letters",
        'name can no longer contain special characters ("~\'!()*")',
    ]
    assert len(validation.violations) == 3


def test_non_string_names_are_rejected():
    validation = validate_package_name(None)
    assert validation.errors == ["name must be a string"]


def test_require_valid_name_raises_with_violations():
    with pytest.raises(InvalidPackageNameError) as excinfo:
        require_valid_name("_Bad")

    assert excinfo.value.name == "_Bad"
    assert "name cannot start with an underscore" in excinfo.value.violations
    assert "name can no longer contain capital letters" in excinfo.value.violations


def test_require_valid_name_returns_validation_for_good_names():
    assert require_valid_name("widgets").name == "widgets"


def test_scoped_name():
    assert scoped_name("ganache", "widgets") == "@ganache/widgets"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("widgets", "widgets"),
        ("json-rpc", "jsonRpc"),
        ("ethereum-address_utils", "ethereumAddressUtils"),
        ("some.package", "somePackage"),
        ("FOO-bar", "fooBar"),
        ("2d-shapes", "_2dShapes"),
        ("---", "pkg"),
    ],
)
def test_to_code_identifier(value: str, expected: str):
    assert to_code_identifier(value) == expected
