"""
Local model classifier for routelm.

Classifies user input with a self-hosted inference server. The model is
offered a single `analyzePrompt` tool and must answer with a tool
invocation naming the selected agent and its confidence.

Usage:
    config = LocalClassifierConfig(
        api_url="http://localhost:8080",
        model_name="llama3-8b-instruct",
    )
    async with LocalClassifier(config, registry) as classifier:
        result = await classifier.classify("Where is my invoice?", [])
        result.selected_agent  # Agent(id="billing", ...)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

import httpx

from ..errors import ConfigurationError, MissingToolUseError, TransportError
from .base import Classifier, ClassifierResult
from .schemas import ANALYZE_PROMPT_TOOL, GenerateRequest, GenerateResponse, parse_tool_input

if TYPE_CHECKING:
    from ..agents import AgentRegistry
    from ..config import ClassifierSettings
    from ..types import ConversationMessage

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 1000


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class InferenceConfig:
    """
    Sampling options forwarded to the inference server.

    Options left as None are omitted from the request so the server
    applies its own defaults.
    """

    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    stop_sequences: tuple[str, ...] | None = None

    def normalized(self) -> "InferenceConfig":
        """Return a copy with max_tokens defaulted."""
        return InferenceConfig(
            max_tokens=self.max_tokens if self.max_tokens is not None else DEFAULT_MAX_TOKENS,
            temperature=self.temperature,
            top_p=self.top_p,
            stop_sequences=tuple(self.stop_sequences) if self.stop_sequences is not None else None,
        )


@dataclass(frozen=True, slots=True)
class LocalClassifierConfig:
    """Configuration for LocalClassifier."""

    # Required
    api_url: str = ""
    model_name: str = ""

    # Optional
    inference_config: InferenceConfig = field(default_factory=InferenceConfig)
    timeout: float = 30.0

    def __post_init__(self):
        """Validate configuration."""
        # Frozen, so normalize through object.__setattr__
        object.__setattr__(self, "api_url", (self.api_url or "").rstrip("/"))
        if not self.api_url or not self.model_name:
            raise ConfigurationError("API URL and model name are required", "local")
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be positive", "local")
        object.__setattr__(self, "inference_config", self.inference_config.normalized())


# =============================================================================
# Classifier
# =============================================================================


class LocalClassifier(Classifier):
    """
    Classifier backed by a locally hosted model.

    Sends one POST to `{api_url}/generate` per request, with no retry.
    Every failure is logged and re-raised; no default agent is ever
    substituted for a failed classification.

    Requirements:
    - An inference server exposing `/generate` with tool support
    """

    def __init__(self, config: LocalClassifierConfig, registry: "AgentRegistry"):
        """
        Initialize local classifier.

        Args:
            config: Endpoint, model and sampling configuration
            registry: Registry used to resolve the selected agent
        """
        super().__init__(registry)
        self.config = config
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        settings: "ClassifierSettings",
        registry: "AgentRegistry",
    ) -> "LocalClassifier":
        """Create a classifier from environment settings."""
        return cls(settings.to_classifier_config(), registry)

    @property
    def name(self) -> str:
        return "local"

    @property
    def inference_config(self) -> InferenceConfig:
        return self.config.inference_config

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.api_url,
                headers={"Content-Type": "application/json"},
                timeout=self.config.timeout,
            )
        return self._client

    def build_request(self, input_text: str) -> GenerateRequest:
        """Build the `/generate` request body for input text."""
        inference = self.inference_config
        return GenerateRequest(
            model=self.config.model_name,
            prompt=input_text,
            max_tokens=inference.max_tokens,
            temperature=inference.temperature,
            top_p=inference.top_p,
            stop=list(inference.stop_sequences) if inference.stop_sequences is not None else None,
            tools=[ANALYZE_PROMPT_TOOL],
        )

    async def _post_generate(self, payload: dict[str, Any]) -> Any:
        """
        POST the payload to `/generate` and decode the JSON body.

        Raises:
            TransportError: On network failure, non-2xx status or non-JSON body
        """
        client = await self._get_client()

        try:
            response = await client.post("/generate", json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout: {e}", self.name) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Network error: {e}", self.name) from e

        if not response.is_success:
            body = response.text
            raise TransportError(
                f"Request failed: {body[:200]}",
                self.name,
                status_code=response.status_code,
                response_body=body,
            )

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(
                f"Response is not valid JSON: {e}",
                self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    def _extract_tool_input(self, body: Any) -> Any:
        """Return the first choice's tool invocation input."""
        try:
            envelope = GenerateResponse.model_validate(body)
        except ValueError as e:
            raise MissingToolUseError(
                f"Response does not contain a tool invocation: {e}", self.name
            ) from e

        if envelope.tool_use is None:
            raise MissingToolUseError("No tool use found in the response", self.name)
        return envelope.tool_input

    async def process_request(
        self,
        input_text: str,
        chat_history: Sequence["ConversationMessage"],
    ) -> ClassifierResult:
        """
        Classify input text using the local model.

        Args:
            input_text: User input to classify
            chat_history: Prior conversation turns (not sent to the model)

        Returns:
            ClassifierResult with the resolved agent and raw confidence

        Raises:
            TransportError: Endpoint unreachable or answered badly
            MissingToolUseError: Model did not invoke the tool
            MalformedToolInputError: Tool input failed validation
            UnknownAgentError: Selected agent is not registered
        """
        try:
            payload = self.build_request(input_text).to_payload()

            logger.debug(
                f"Local classification: model={self.config.model_name}, "
                f"chars={len(input_text)}, history={len(chat_history)}"
            )

            body = await self._post_generate(payload)
            tool_input = parse_tool_input(self._extract_tool_input(body), self.name)

            return ClassifierResult(
                selected_agent=self.get_agent_by_id(tool_input.selected_agent),
                confidence=tool_input.confidence,
            )

        except Exception as e:
            logger.error(
                f"Error processing request ({type(e).__name__}) "
                f"for input {input_text[:100]!r}: {e}",
                exc_info=True,
            )
            raise

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "LocalClassifier":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


__all__ = [
    "DEFAULT_MAX_TOKENS",
    "InferenceConfig",
    "LocalClassifier",
    "LocalClassifierConfig",
]
