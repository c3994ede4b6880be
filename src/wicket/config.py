"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, injected at
startup, never read from module globals by the pipeline.
"""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

from wicket.errors import ConfigurationError

_SIZE_UNITS: dict[str, int] = {
    "": 1,
    "b": 1,
    "kb": 1024,
    "mb": 1024**2,
    "gb": 1024**3,
}

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([a-zA-Z]*)\s*$")

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


def parse_size(value: str) -> int:
    """Parse a human-readable byte size such as ``"100MB"`` or ``"512kb"``.

    Raises ``ConfigurationError`` for unknown units or malformed input.
    """
    match = _SIZE_RE.match(value)
    if match is None:
        msg = f"Invalid size {value!r}. Use a number with an optional unit, e.g. '100MB'."
        raise ConfigurationError(msg)
    number, unit = match.groups()
    try:
        multiplier = _SIZE_UNITS[unit.lower()]
    except KeyError:
        msg = f"Unknown size unit {unit!r} in {value!r}. Use b, kb, mb, or gb."
        raise ConfigurationError(msg) from None
    return int(number) * multiplier


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    msg = f"{name} must be a boolean (true/false), got {value!r}"
    raise ConfigurationError(msg)


def _parse_list(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, cors_allow_origins=("https://example.com",))
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # CORS
    cors_allow_origins: tuple[str, ...] = ()
    cors_allow_localhost: bool = True  # Any http://localhost* origin is allowed
    cors_allow_credentials: bool = False
    cors_allow_methods: tuple[str, ...] = ("GET", "HEAD", "PUT", "PATCH", "POST", "DELETE")
    cors_allow_headers: tuple[str, ...] = ()  # Empty = reflect Access-Control-Request-Headers
    cors_expose_headers: tuple[str, ...] = ()
    cors_max_age: int | None = None

    # Limits
    max_body_size: int = 100 * 1024 * 1024  # 100 MB
    request_timeout: float | None = None  # Seconds; None = no deadline

    # Client address: honour X-Forwarded-For from a reverse proxy
    trust_proxy: bool = True

    # Logging
    log_level: str = "info"
    log_format: str = "text"

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if self.max_body_size < 0:
            msg = f"max_body_size must be non-negative, got {self.max_body_size}"
            raise ConfigurationError(msg)
        if self.request_timeout is not None and self.request_timeout <= 0:
            msg = f"request_timeout must be positive, got {self.request_timeout}"
            raise ConfigurationError(msg)
        if self.log_format not in ("text", "json"):
            msg = f"log_format must be 'text' or 'json', got {self.log_format!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = "WICKET_",
    ) -> "AppConfig":
        """Build a config from ``WICKET_*`` environment variables.

        Recognised variables::

            WICKET_HOST, WICKET_PORT
            WICKET_CORS_WHITELIST          comma-separated origins
            WICKET_CORS_ALLOW_LOCALHOST    true/false
            WICKET_CORS_ALLOW_CREDENTIALS  true/false
            WICKET_MAX_BODY_SIZE           bytes or "100MB"
            WICKET_REQUEST_TIMEOUT         seconds
            WICKET_TRUST_PROXY             true/false
            WICKET_LOG_LEVEL, WICKET_LOG_FORMAT

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        def get(name: str) -> str | None:
            return env.get(prefix + name)

        if (value := get("HOST")) is not None:
            overrides["host"] = value
        if (value := get("PORT")) is not None:
            try:
                overrides["port"] = int(value)
            except ValueError:
                msg = f"{prefix}PORT must be an integer, got {value!r}"
                raise ConfigurationError(msg) from None
        if (value := get("CORS_WHITELIST")) is not None:
            overrides["cors_allow_origins"] = _parse_list(value)
        if (value := get("CORS_ALLOW_LOCALHOST")) is not None:
            overrides["cors_allow_localhost"] = _parse_bool(prefix + "CORS_ALLOW_LOCALHOST", value)
        if (value := get("CORS_ALLOW_CREDENTIALS")) is not None:
            overrides["cors_allow_credentials"] = _parse_bool(
                prefix + "CORS_ALLOW_CREDENTIALS", value
            )
        if (value := get("MAX_BODY_SIZE")) is not None:
            overrides["max_body_size"] = parse_size(value)
        if (value := get("REQUEST_TIMEOUT")) is not None:
            try:
                overrides["request_timeout"] = float(value)
            except ValueError:
                msg = f"{prefix}REQUEST_TIMEOUT must be a number, got {value!r}"
                raise ConfigurationError(msg) from None
        if (value := get("TRUST_PROXY")) is not None:
            overrides["trust_proxy"] = _parse_bool(prefix + "TRUST_PROXY", value)
        if (value := get("LOG_LEVEL")) is not None:
            overrides["log_level"] = value.lower()
        if (value := get("LOG_FORMAT")) is not None:
            overrides["log_format"] = value.lower()

        return cls(**overrides)  # type: ignore[arg-type]
