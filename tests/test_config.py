import io

import pytest

from hostfx import (
    DEFAULT_CONFIG,
    ConfigError,
    HostConfig,
    OsHost,
    StepLimitExceededError,
    forever,
    load_config,
    put_line,
    run,
)


class TestLoadConfig:

    def test_defaults(self) -> None:
        config = load_config({})

        assert config == HostConfig()
        assert config.expected_output == DEFAULT_CONFIG["expected_output"]
        assert config.max_steps is None

    def test_reads_prefixed_variables(self) -> None:
        config = load_config(
            {
                "HOSTFX_HTTP_TIMEOUT": "2.5",
                "HOSTFX_FOLLOW_REDIRECTS": "off",
                "HOSTFX_MAX_STEPS": "1000",
                "HOSTFX_LOG_LEVEL": "debug",
                "HOSTFX_EXPECTED_OUTPUT": "bye",
            }
        )

        assert config.http_timeout == 2.5
        assert config.follow_redirects is False
        assert config.max_steps == 1000
        assert config.log_level == "DEBUG"
        assert config.expected_output == "bye"

    def test_reads_process_environment_by_default(self, monkeypatch) -> None:
        monkeypatch.setenv("HOSTFX_MAX_STEPS", "77")
        assert load_config().max_steps == 77

    def test_default_config_is_immutable(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_CONFIG["log_level"] = "DEBUG"  # type: ignore[index]

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("HOSTFX_HTTP_TIMEOUT", "soon"),
            ("HOSTFX_HTTP_TIMEOUT", "0"),
            ("HOSTFX_HTTP_TIMEOUT", "nan"),
            ("HOSTFX_HTTP_TIMEOUT", "inf"),
            ("HOSTFX_FOLLOW_REDIRECTS", "maybe"),
            ("HOSTFX_MAX_STEPS", "many"),
            ("HOSTFX_MAX_STEPS", "-1"),
            ("HOSTFX_LOG_LEVEL", "LOUD"),
        ],
    )
    def test_invalid_values(self, key, value) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config({key: value})

        assert exc_info.value.key == key
        assert isinstance(exc_info.value, ValueError)
        assert repr(value) in str(exc_info.value)


class TestOsHostConfig:

    def test_os_host_step_budget_comes_from_config(self) -> None:
        host = OsHost(HostConfig(max_steps=30), stdout=io.StringIO())
        result = run(forever(put_line("x")), host)

        assert isinstance(result.error, StepLimitExceededError)
        assert result.error.max_steps == 30
