"""
Classifier Protocol for routelm.

Defines the interface for classifiers that pick the agent best suited
to handle a piece of user input.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from ..agents import Agent, AgentRegistry
    from ..types import ConversationMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifierResult:
    """
    Outcome of a classification.

    Attributes:
        selected_agent: Agent resolved from the model's choice
        confidence: Model-reported confidence, as sent (not clamped)
    """

    selected_agent: "Agent"
    confidence: float


@runtime_checkable
class ClassifierProtocol(Protocol):
    """
    Protocol for classifiers.

    Orchestrators depend only on this capability; backends are
    interchangeable.
    """

    async def classify(
        self,
        input_text: str,
        chat_history: Sequence["ConversationMessage"],
    ) -> ClassifierResult:
        ...


class Classifier(ABC):
    """
    Base class for classifier implementations.

    Subclasses implement process_request() for their backend and use
    get_agent_by_id() to turn the backend's answer into an Agent.
    """

    def __init__(self, registry: "AgentRegistry"):
        self._registry = registry

    @property
    @abstractmethod
    def name(self) -> str:
        """Classifier name for logging."""
        pass

    @property
    def registry(self) -> "AgentRegistry":
        return self._registry

    def get_agent_by_id(self, agent_id: str) -> "Agent":
        """
        Resolve an agent identifier through the registry.

        Raises:
            UnknownAgentError: If the registry does not know the identifier
        """
        return self._registry.lookup_agent_by_id(agent_id)

    @abstractmethod
    async def process_request(
        self,
        input_text: str,
        chat_history: Sequence["ConversationMessage"],
    ) -> ClassifierResult:
        """
        Classify input text against the registered agents.

        Args:
            input_text: User input to classify
            chat_history: Prior conversation turns, oldest first

        Returns:
            ClassifierResult with the selected agent and confidence
        """
        pass

    async def classify(
        self,
        input_text: str,
        chat_history: Sequence["ConversationMessage"],
    ) -> ClassifierResult:
        """Classify input text, timing the backend call."""
        start = time.perf_counter()
        result = await self.process_request(input_text, chat_history)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"[{self.name}] Selected '{result.selected_agent.id}' "
            f"(confidence={result.confidence}) in {elapsed_ms:.1f}ms"
        )
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


__all__ = [
    "Classifier",
    "ClassifierProtocol",
    "ClassifierResult",
]
