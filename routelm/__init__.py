"""
routelm - Route user input to agents with a locally hosted language model.

A classifier asks a self-hosted model which agent should handle a piece
of user input. The model answers through a structured tool invocation,
which is validated and resolved against an agent registry.

Quick Start:
    >>> from routelm import Agent, InMemoryAgentRegistry, LocalClassifier, LocalClassifierConfig
    >>>
    >>> registry = InMemoryAgentRegistry([Agent(id="billing", name="Billing")])
    >>> classifier = LocalClassifier(
    ...     LocalClassifierConfig(api_url="http://localhost:8080", model_name="llama3"),
    ...     registry,
    ... )
    >>> result = await classifier.classify("Where is my invoice?", [])
    >>> result.selected_agent.id
    'billing'
"""

__version__ = "0.1.0"
__license__ = "MIT"

from routelm.agents import Agent, AgentRegistry, InMemoryAgentRegistry
from routelm.classifiers import (
    Classifier,
    ClassifierProtocol,
    ClassifierResult,
    InferenceConfig,
    LocalClassifier,
    LocalClassifierConfig,
)
from routelm.config import ClassifierSettings, get_settings
from routelm.errors import (
    ClassifierError,
    ConfigurationError,
    MalformedToolInputError,
    MissingToolUseError,
    TransportError,
    UnknownAgentError,
)
from routelm.types import ConversationMessage, ParticipantRole

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Agents
    "Agent",
    "AgentRegistry",
    "InMemoryAgentRegistry",
    # Classifiers
    "Classifier",
    "ClassifierProtocol",
    "ClassifierResult",
    "InferenceConfig",
    "LocalClassifier",
    "LocalClassifierConfig",
    # Settings
    "ClassifierSettings",
    "get_settings",
    # Errors
    "ClassifierError",
    "ConfigurationError",
    "MalformedToolInputError",
    "MissingToolUseError",
    "TransportError",
    "UnknownAgentError",
    # Conversation
    "ConversationMessage",
    "ParticipantRole",
]
