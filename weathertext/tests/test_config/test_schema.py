"""Tests for config schema validation."""

import pytest
from pydantic import ValidationError

from weathertext.config.schema import (
    AppConfig,
    ProviderConfig,
    ProviderName,
    ServerConfig,
)


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.providers == []
        assert config.server.port == 3000
        assert config.server.dev_endpoints is False
        assert config.location.what3words_api_key_env == "WHAT3WORDS_API_KEY"
        assert config.messaging.from_number_env == "TWILIO_PHONE_NUMBER"

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            AppConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            ServerConfig(port=3000, bogus=True)


class TestProviderConfig:
    def test_name_from_string(self):
        pc = ProviderConfig(name="Tomorrow.io", api_key_env="TOMORROW_API_KEY")
        assert pc.name == ProviderName.TOMORROW_IO
        assert pc.enabled is True

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValidationError):
            ProviderConfig(name="AccuWeather")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ProviderConfig(name="Open-Meteo", timeout_seconds=0)


class TestServerConfig:
    def test_port_range(self):
        with pytest.raises(ValidationError):
            ServerConfig(port=70000)
