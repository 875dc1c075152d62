"""
Tests for classifier configuration and settings.
"""

import pytest

from routelm.classifiers.local import DEFAULT_MAX_TOKENS, InferenceConfig, LocalClassifierConfig
from routelm.config import ClassifierSettings, get_settings, load_settings
from routelm.errors import ConfigurationError


class TestLocalClassifierConfig:
    """Tests for LocalClassifierConfig."""

    def test_config_creation(self):
        config = LocalClassifierConfig(api_url="http://localhost:8080", model_name="llama3")

        assert config.api_url == "http://localhost:8080"
        assert config.model_name == "llama3"
        assert config.timeout == 30.0

    def test_default_max_tokens(self):
        config = LocalClassifierConfig(api_url="http://localhost:8080", model_name="llama3")

        assert config.inference_config.max_tokens == DEFAULT_MAX_TOKENS == 1000
        assert config.inference_config.temperature is None
        assert config.inference_config.top_p is None
        assert config.inference_config.stop_sequences is None

    def test_explicit_inference_options_kept(self):
        config = LocalClassifierConfig(
            api_url="http://localhost:8080",
            model_name="llama3",
            inference_config=InferenceConfig(
                max_tokens=64, temperature=0.2, top_p=0.95, stop_sequences=("\n\n",)
            ),
        )

        assert config.inference_config == InferenceConfig(
            max_tokens=64, temperature=0.2, top_p=0.95, stop_sequences=("\n\n",)
        )

    def test_trailing_slash_stripped(self):
        config = LocalClassifierConfig(api_url="http://localhost:8080/", model_name="llama3")
        assert config.api_url == "http://localhost:8080"

    @pytest.mark.parametrize(
        "api_url,model_name",
        [("", "llama3"), ("http://localhost:8080", ""), ("", ""), (None, "llama3")],
    )
    def test_requires_url_and_model(self, api_url, model_name):
        with pytest.raises(ConfigurationError, match="API URL and model name are required"):
            LocalClassifierConfig(
                api_url=api_url,
                model_name=model_name,
                inference_config=InferenceConfig(max_tokens=10, temperature=0.5),
            )

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            LocalClassifierConfig(api_url="", model_name="llama3")

    @pytest.mark.parametrize("api_url", ["/", "///"])
    def test_url_empty_after_normalization(self, api_url):
        with pytest.raises(ConfigurationError, match="API URL and model name are required"):
            LocalClassifierConfig(api_url=api_url, model_name="llama3")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ConfigurationError, match="Timeout"):
            LocalClassifierConfig(api_url="http://x", model_name="m", timeout=0)

    def test_config_is_immutable(self):
        config = LocalClassifierConfig(api_url="http://localhost:8080", model_name="llama3")
        with pytest.raises(AttributeError):
            config.model_name = "other"


class TestClassifierSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        for name in (
            "ROUTELM_API_URL",
            "ROUTELM_MODEL_NAME",
            "ROUTELM_MAX_TOKENS",
            "ROUTELM_TEMPERATURE",
            "ROUTELM_TOP_P",
            "ROUTELM_STOP_SEQUENCES",
            "ROUTELM_TIMEOUT",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.api_url == ""
        assert settings.max_tokens == 1000
        assert settings.temperature is None
        assert settings.stop_sequences is None
        assert settings.timeout == 30.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ROUTELM_API_URL", "http://gpu-box:9000")
        monkeypatch.setenv("ROUTELM_MODEL_NAME", "mistral-7b")
        monkeypatch.setenv("ROUTELM_MAX_TOKENS", "256")
        monkeypatch.setenv("ROUTELM_TEMPERATURE", "0.3")
        monkeypatch.setenv("ROUTELM_TOP_P", "0.8")
        monkeypatch.setenv("ROUTELM_STOP_SEQUENCES", "</s>, ###")
        monkeypatch.setenv("ROUTELM_TIMEOUT", "5")

        settings = load_settings()

        assert settings.api_url == "http://gpu-box:9000"
        assert settings.model_name == "mistral-7b"
        assert settings.max_tokens == 256
        assert settings.temperature == 0.3
        assert settings.top_p == 0.8
        assert settings.stop_sequences == ["</s>", "###"]
        assert settings.timeout == 5.0

    def test_to_classifier_config(self):
        settings = ClassifierSettings(
            api_url="http://localhost:8080",
            model_name="llama3",
            temperature=0.1,
            stop_sequences=["END"],
        )

        config = settings.to_classifier_config()

        assert config.inference_config.max_tokens == 1000
        assert config.inference_config.temperature == 0.1
        assert config.inference_config.stop_sequences == ("END",)

    def test_to_classifier_config_requires_url(self):
        with pytest.raises(ConfigurationError):
            ClassifierSettings(model_name="llama3").to_classifier_config()

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
