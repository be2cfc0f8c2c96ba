"""
Tests for client configuration.
"""

import pytest
from pydantic import ValidationError

from voipms.config import (
    DEFAULT_TIMEOUT_SECONDS,
    REST_API_URL,
    VoipMsConfig,
    get_config,
    parse_duration,
)


class TestVoipMsConfig:
    def test_default_values(self) -> None:
        # BaseSettings: environment variables may override defaults, so check the declared ones.
        fields = VoipMsConfig.model_fields
        assert fields["api_url"].default == REST_API_URL == "https://voip.ms/api/v1/rest.php"
        assert fields["api_timeout"].default == DEFAULT_TIMEOUT_SECONDS == 2.0

    def test_custom_values(self) -> None:
        config = VoipMsConfig(
            username="a@x.com",
            api_key="k",
            api_url="https://example.com/rest.php",
            api_timeout=5,
            log_level="debug",
        )

        assert config.username == "a@x.com"
        assert config.api_key == "k"
        assert config.api_url == "https://example.com/rest.php"
        assert config.api_timeout == 5.0
        assert config.log_level == "DEBUG"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VOIPMS_USERNAME", "env@x.com")
        monkeypatch.setenv("VOIPMS_API_KEY", "envkey")
        monkeypatch.setenv("VOIPMS_API_TIMEOUT", "3s")

        config = VoipMsConfig()

        assert config.username == "env@x.com"
        assert config.api_key == "envkey"
        assert config.api_timeout == 3.0

    def test_empty_env_url_falls_back_to_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VOIPMS_API_URL", "")

        assert VoipMsConfig().api_url == REST_API_URL

    def test_frozen(self) -> None:
        config = VoipMsConfig(username="a@x.com", api_key="k")

        with pytest.raises(ValidationError):
            config.username = "other"  # type: ignore[misc]

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            VoipMsConfig(username="a", api_key="k", api_timeout=0)

    def test_api_key_hidden_from_repr(self) -> None:
        assert "s3cr3t" not in repr(VoipMsConfig(username="a", api_key="s3cr3t"))

    def test_require_credentials(self) -> None:
        assert VoipMsConfig(username="a", api_key="k").require_credentials().has_credentials

        with pytest.raises(ValueError, match="username and API key are both required"):
            VoipMsConfig(username="a", api_key="").require_credentials()

    def test_get_config_ignores_unset_overrides(self) -> None:
        config = get_config(username="a", api_key="k", api_url=None, api_timeout=None)

        assert config.username == "a"
        assert config.api_timeout > 0


class TestParseDuration:
    @pytest.mark.parametrize(
        ("raw", "seconds"),
        [("2", 2.0), ("2s", 2.0), ("1.5s", 1.5), ("500ms", 0.5), ("1m", 60.0), (" 3 s ", 3.0)],
    )
    def test_valid(self, raw: str, seconds: float) -> None:
        assert parse_duration(raw) == pytest.approx(seconds)

    @pytest.mark.parametrize("raw", ["", "fast", "2h", "-1s", "1m30s"])
    def test_invalid(self, raw: str) -> None:
        with pytest.raises(ValueError):
            parse_duration(raw)
