import re

from ..schemas import NAME_PATTERN

NAME_ERROR_MESSAGE = "Please use only Latin letters and digits"

_NAME_RE = re.compile(NAME_PATTERN)


class InvalidNameError(ValueError):
    """Raised when a lookup name contains anything but ASCII letters and digits."""


def is_valid_name(value: str) -> bool:
    return _NAME_RE.fullmatch(value) is not None


def validate_name(value: str) -> str:
    if not is_valid_name(value):
        raise InvalidNameError(NAME_ERROR_MESSAGE)
    return value
