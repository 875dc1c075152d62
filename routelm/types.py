"""
Conversation types for routelm.

Messages exchanged between the user and agents, supplied to classifiers
as chat history.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ParticipantRole(str, Enum):
    """Role of a participant in the conversation."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationMessage:
    """
    A single conversation turn.

    Attributes:
        role: Who produced the message
        content: Text content of the message
    """

    role: ParticipantRole
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def user(cls, content: str) -> "ConversationMessage":
        """Create a user message."""
        return cls(role=ParticipantRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ConversationMessage":
        """Create an assistant message."""
        return cls(role=ParticipantRole.ASSISTANT, content=content)


__all__ = [
    "ConversationMessage",
    "ParticipantRole",
]
