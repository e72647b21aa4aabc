"""Provider-neutral chat message type."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    SYSTEM = "system"
    HUMAN = "human"
    AI = "ai"


@dataclass(frozen=True)
class PromptMessage:
    """A single message in a chat exchange."""
    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "PromptMessage":
        return cls(Role.SYSTEM, content)

    @classmethod
    def human(cls, content: str) -> "PromptMessage":
        return cls(Role.HUMAN, content)

    @classmethod
    def ai(cls, content: str) -> "PromptMessage":
        return cls(Role.AI, content)
