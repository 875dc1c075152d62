"""
Classifiers for routelm.

Provides classifier implementations that select the agent for a piece
of user input:
- LocalClassifier: self-hosted model reached over HTTP
"""

from .base import Classifier, ClassifierProtocol, ClassifierResult
from .local import DEFAULT_MAX_TOKENS, InferenceConfig, LocalClassifier, LocalClassifierConfig
from .schemas import ANALYZE_PROMPT_TOOL, ToolInput, parse_tool_input

__all__ = [
    # Protocol and base
    "Classifier",
    "ClassifierProtocol",
    "ClassifierResult",
    # Local
    "DEFAULT_MAX_TOKENS",
    "InferenceConfig",
    "LocalClassifier",
    "LocalClassifierConfig",
    # Schemas
    "ANALYZE_PROMPT_TOOL",
    "ToolInput",
    "parse_tool_input",
]
