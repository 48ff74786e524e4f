"""
Message DTO used across adapters.

Defines the `Message` dataclass and the `Role` literal. Messages are supplied
by the caller in conversation order and are never modified by the client.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """One turn of conversation.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text of the turn.
    """

    role: Role
    content: str

    @property
    def is_system(self) -> bool:
        return self.role == "system"

    def to_wire(self) -> Dict[str, str]:
        """Return the ``{"role", "content"}`` mapping both vendor bodies use."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)


__all__ = ["Message", "Role"]
