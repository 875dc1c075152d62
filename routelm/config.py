"""
Settings for routelm.

Environment-driven settings for building a classifier without wiring
its configuration by hand. All variables use the ROUTELM_ prefix:

    ROUTELM_API_URL          inference server base URL
    ROUTELM_MODEL_NAME       model identifier
    ROUTELM_MAX_TOKENS       maximum output tokens (default 1000)
    ROUTELM_TEMPERATURE      sampling temperature (server default if unset)
    ROUTELM_TOP_P            nucleus sampling probability (server default if unset)
    ROUTELM_STOP_SEQUENCES   comma-separated stop sequences
    ROUTELM_TIMEOUT          HTTP timeout in seconds (default 30)
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field

from .classifiers.local import DEFAULT_MAX_TOKENS, InferenceConfig, LocalClassifierConfig


class ClassifierSettings(BaseModel):
    """
    Classifier settings model.

    Values are validated here; emptiness of the URL and model name is
    checked when the classifier configuration is built.
    """

    api_url: str = Field(default="", description="Inference server base URL")
    model_name: str = Field(default="", description="Model identifier")
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1)
    temperature: float | None = Field(default=None, ge=0)
    top_p: float | None = Field(default=None, ge=0, le=1)
    stop_sequences: list[str] | None = None
    timeout: float = Field(default=30.0, gt=0)

    def to_classifier_config(self) -> LocalClassifierConfig:
        """
        Build the classifier configuration.

        Raises:
            ConfigurationError: If the URL or model name is empty
        """
        return LocalClassifierConfig(
            api_url=self.api_url,
            model_name=self.model_name,
            inference_config=InferenceConfig(
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                top_p=self.top_p,
                stop_sequences=tuple(self.stop_sequences) if self.stop_sequences else None,
            ),
            timeout=self.timeout,
        )


def _optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def load_settings() -> ClassifierSettings:
    """Read settings from ROUTELM_* environment variables."""
    stop = _optional("ROUTELM_STOP_SEQUENCES")
    return ClassifierSettings(
        api_url=os.getenv("ROUTELM_API_URL", ""),
        model_name=os.getenv("ROUTELM_MODEL_NAME", ""),
        max_tokens=os.getenv("ROUTELM_MAX_TOKENS", str(DEFAULT_MAX_TOKENS)),
        temperature=_optional("ROUTELM_TEMPERATURE"),
        top_p=_optional("ROUTELM_TOP_P"),
        stop_sequences=[s.strip() for s in stop.split(",") if s.strip()] if stop else None,
        timeout=os.getenv("ROUTELM_TIMEOUT", "30"),
    )


@lru_cache()
def get_settings() -> ClassifierSettings:
    """
    Get settings from environment.

    Uses lru_cache for singleton pattern.
    """
    return load_settings()


__all__ = [
    "ClassifierSettings",
    "get_settings",
    "load_settings",
]
