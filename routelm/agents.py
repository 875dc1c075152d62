"""
Agent registry for routelm.

Classifiers return a reference to the agent that should handle the
input. Agents are owned by a registry; a classifier only looks them up
by the identifier the model selected.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Protocol, runtime_checkable

from .errors import UnknownAgentError

logger = logging.getLogger(__name__)

_NON_KEY_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")


def generate_key_from_name(name: str) -> str:
    """
    Derive a registry key from a human-readable agent name.

    "Tech Agent" -> "tech-agent", "Billing & Payments" -> "billing-payments"
    """
    key = _NON_KEY_CHARS.sub("", name.lower())
    return _WHITESPACE.sub("-", key.strip())


@dataclass(frozen=True)
class Agent:
    """
    Handle to an agent that can receive classified input.

    Attributes:
        id: Registry key the model refers to in `selected_agent`
        name: Display name
        description: What the agent handles, used when prompting
    """

    id: str
    name: str
    description: str = ""

    @classmethod
    def from_name(cls, name: str, description: str = "") -> "Agent":
        """Create an agent whose id is derived from its name."""
        return cls(id=generate_key_from_name(name), name=name, description=description)


@runtime_checkable
class AgentRegistry(Protocol):
    """
    Protocol for agent lookup.

    Implementations raise UnknownAgentError for identifiers they
    cannot resolve.
    """

    def lookup_agent_by_id(self, agent_id: str) -> Agent:
        ...


class InMemoryAgentRegistry:
    """
    Dictionary-backed AgentRegistry.

    Lookups are case-insensitive. When the full identifier is not
    registered, its first word is tried, so model output such as
    "Tech agent" resolves to the agent registered under "tech".

    Usage:
        registry = InMemoryAgentRegistry()
        registry.register(Agent(id="billing", name="Billing"))
        agent = registry.lookup_agent_by_id("billing")
    """

    def __init__(self, agents: Iterable[Agent] | None = None):
        self._agents: dict[str, Agent] = {}
        if agents:
            self.set_agents(agents)

    def _resolve_key(self, agent_id: str) -> str | None:
        key = agent_id.strip().lower()
        if key in self._agents:
            return key
        # Models sometimes append words after the id ("billing agent")
        parts = key.split()
        if parts and parts[0] in self._agents:
            return parts[0]
        return None

    def register(self, agent: Agent) -> None:
        """
        Register an agent.

        Raises:
            ValueError: If an agent with the same id is already registered
        """
        key = agent.id.lower()
        if key in self._agents:
            raise ValueError(f"Agent '{agent.id}' is already registered")
        self._agents[key] = agent
        logger.debug(f"Registered agent: {agent.id}")

    def set_agents(self, agents: Iterable[Agent]) -> None:
        """Replace all registered agents."""
        self._agents = {}
        for agent in agents:
            self.register(agent)

    def lookup_agent_by_id(self, agent_id: str) -> Agent:
        key = self._resolve_key(agent_id)
        if key is None:
            raise UnknownAgentError(agent_id)
        return self._agents[key]

    @property
    def agents(self) -> dict[str, Agent]:
        return dict(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        if not isinstance(agent_id, str):
            return False
        return self._resolve_key(agent_id) is not None

    def __len__(self) -> int:
        return len(self._agents)


__all__ = [
    "Agent",
    "AgentRegistry",
    "InMemoryAgentRegistry",
    "generate_key_from_name",
]
