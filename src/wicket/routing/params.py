"""Path parameter converters for route segments like ``{id:int}``."""

import re

from wicket.errors import ConfigurationError

# Regex each decoded segment value must fully match. Splitting happens
# first, so "str" and "path" may contain a decoded "/".
CONVERTERS: dict[str, str] = {
    "str": r".+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}


def compile_converter(param_type: str, pattern: str) -> re.Pattern[str]:
    """Return the compiled regex for *param_type*.

    Raises ``ConfigurationError`` naming *pattern* if the converter is unknown.
    """
    try:
        regex = CONVERTERS[param_type]
    except KeyError:
        known = ", ".join(sorted(CONVERTERS))
        msg = f"Unknown converter {param_type!r} in route {pattern!r}. Known converters: {known}."
        raise ConfigurationError(msg) from None
    return re.compile(regex)
