"""Tests for AppConfig and environment loading."""

import dataclasses

import pytest

from wicket.config import AppConfig, parse_size
from wicket.errors import ConfigurationError


class TestDefaults:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.cors_allow_origins == ()
        assert config.cors_allow_localhost is True
        assert config.cors_allow_credentials is False
        assert config.max_body_size == 100 * 1024 * 1024
        assert config.request_timeout is None
        assert config.trust_proxy is True
        assert config.log_level == "info"
        assert config.log_format == "text"

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 9000  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(AppConfig(), port=3000)
        assert config.port == 3000


class TestValidation:
    @pytest.mark.parametrize("port", [-1, 65536])
    def test_port_range(self, port: int) -> None:
        with pytest.raises(ConfigurationError, match="port"):
            AppConfig(port=port)

    def test_port_zero_allowed(self) -> None:
        assert AppConfig(port=0).port == 0

    def test_negative_body_size(self) -> None:
        with pytest.raises(ConfigurationError, match="max_body_size"):
            AppConfig(max_body_size=-1)

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ConfigurationError, match="request_timeout"):
            AppConfig(request_timeout=0)

    def test_log_format(self) -> None:
        with pytest.raises(ConfigurationError, match="log_format"):
            AppConfig(log_format="xml")


class TestParseSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("100", 100),
            ("100b", 100),
            ("512kb", 512 * 1024),
            ("100MB", 100 * 1024 * 1024),
            ("2 gb", 2 * 1024**3),
        ],
    )
    def test_sizes(self, value: str, expected: int) -> None:
        assert parse_size(value) == expected

    def test_unknown_unit(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown size unit"):
            parse_size("10tb")

    def test_malformed(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid size"):
            parse_size("lots")


class TestFromEnv:
    def test_empty_environment_gives_defaults(self) -> None:
        assert AppConfig.from_env({}) == AppConfig()

    def test_reads_prefixed_variables(self) -> None:
        config = AppConfig.from_env(
            {
                "WICKET_HOST": "0.0.0.0",
                "WICKET_PORT": "3000",
                "WICKET_CORS_WHITELIST": "https://a.example, https://b.example,",
                "WICKET_CORS_ALLOW_LOCALHOST": "false",
                "WICKET_CORS_ALLOW_CREDENTIALS": "yes",
                "WICKET_MAX_BODY_SIZE": "1MB",
                "WICKET_REQUEST_TIMEOUT": "2.5",
                "WICKET_TRUST_PROXY": "0",
                "WICKET_LOG_LEVEL": "DEBUG",
                "WICKET_LOG_FORMAT": "JSON",
            }
        )
        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.cors_allow_origins == ("https://a.example", "https://b.example")
        assert config.cors_allow_localhost is False
        assert config.cors_allow_credentials is True
        assert config.max_body_size == 1024 * 1024
        assert config.request_timeout == 2.5
        assert config.trust_proxy is False
        assert config.log_level == "debug"
        assert config.log_format == "json"

    def test_ignores_unprefixed_variables(self) -> None:
        assert AppConfig.from_env({"PORT": "1234"}).port == 8080

    def test_custom_prefix(self) -> None:
        assert AppConfig.from_env({"API_PORT": "1234"}, prefix="API_").port == 1234

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("WICKET_PORT", "4321")
        assert AppConfig.from_env().port == 4321

    def test_bad_port(self) -> None:
        with pytest.raises(ConfigurationError, match="WICKET_PORT"):
            AppConfig.from_env({"WICKET_PORT": "eighty"})

    def test_bad_bool(self) -> None:
        with pytest.raises(ConfigurationError, match="WICKET_TRUST_PROXY"):
            AppConfig.from_env({"WICKET_TRUST_PROXY": "maybe"})

    def test_bad_timeout(self) -> None:
        with pytest.raises(ConfigurationError, match="WICKET_REQUEST_TIMEOUT"):
            AppConfig.from_env({"WICKET_REQUEST_TIMEOUT": "soon"})

    def test_bad_size(self) -> None:
        with pytest.raises(ConfigurationError):
            AppConfig.from_env({"WICKET_MAX_BODY_SIZE": "100XB"})
