import pytest

from gh_lookup.services.validation import (
    NAME_ERROR_MESSAGE,
    InvalidNameError,
    is_valid_name,
    validate_name,
)


@pytest.mark.parametrize("value", ["", "a", "Z", "0", "octocat", "Hello2World"])
def test_valid_names(value):
    assert is_valid_name(value)
    assert validate_name(value) == value


@pytest.mark.parametrize("value", [" ", "octo cat", "octo-cat", "a.b", "ü", "abc\n", "\nabc"])
def test_invalid_names(value):
    assert not is_valid_name(value)
    with pytest.raises(InvalidNameError, match=NAME_ERROR_MESSAGE):
        validate_name(value)
