"""
Exceptions raised by routelm.

Every classifier failure derives from ClassifierError so callers can
catch the whole family, while the subclasses tell apart where the
classification went wrong:

    ConfigurationError      invalid construction arguments
    TransportError          network failure, non-2xx or unparseable body
    MissingToolUseError     response carries no tool invocation
    MalformedToolInputError tool invocation fails schema validation
    UnknownAgentError       selected agent is not in the registry
"""

from __future__ import annotations

from typing import Any


class ClassifierError(Exception):
    """Base exception for classifier errors."""

    def __init__(self, message: str, classifier: str = "classifier"):
        super().__init__(message)
        self.classifier = classifier

    def __str__(self) -> str:
        return f"[{self.classifier}] {self.args[0]}"


class ConfigurationError(ClassifierError, ValueError):
    """Raised when a classifier is constructed with invalid arguments."""


class TransportError(ClassifierError):
    """Raised when the inference endpoint cannot be reached or answers badly."""

    def __init__(
        self,
        message: str,
        classifier: str = "classifier",
        *,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message, classifier)
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        text = super().__str__()
        if self.status_code:
            text += f" (status={self.status_code})"
        return text


class MissingToolUseError(ClassifierError):
    """Raised when the model response has no tool invocation."""


class MalformedToolInputError(ClassifierError):
    """Raised when the tool invocation input does not match the tool schema."""

    def __init__(
        self,
        message: str,
        classifier: str = "classifier",
        *,
        validation_errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message, classifier)
        self.validation_errors = validation_errors or []


class UnknownAgentError(ClassifierError, LookupError):
    """Raised by agent registries when an identifier does not resolve."""

    def __init__(self, agent_id: str, classifier: str = "registry"):
        super().__init__(f"Unknown agent: {agent_id!r}", classifier)
        self.agent_id = agent_id


__all__ = [
    "ClassifierError",
    "ConfigurationError",
    "MalformedToolInputError",
    "MissingToolUseError",
    "TransportError",
    "UnknownAgentError",
]
