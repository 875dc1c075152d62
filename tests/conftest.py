"""
Pytest configuration and fixtures for routelm tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
# This allows `from routelm.classifiers import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from routelm.agents import Agent, InMemoryAgentRegistry  # noqa: E402
from routelm.types import ConversationMessage  # noqa: E402


@pytest.fixture
def agent_a():
    return Agent(id="agentA", name="Agent A", description="Handles greetings")


@pytest.fixture
def billing_agent():
    return Agent.from_name("Billing", "Invoices and payments")


@pytest.fixture
def registry(agent_a, billing_agent):
    """Registry with two agents."""
    return InMemoryAgentRegistry([agent_a, billing_agent])


@pytest.fixture
def sample_history():
    """Sample conversation for testing."""
    return [
        ConversationMessage.user("Hello"),
        ConversationMessage.assistant("Hi! How can I help?"),
    ]
