"""Message types shared by the generation clients."""

from enum import Enum


class Role(str, Enum):
    """Role of a message sent to the generation service."""

    SYSTEM = "system"
    HUMAN = "human"


def system_message(content: str) -> dict[str, str]:
    """Build a system-role message."""
    return {"role": Role.SYSTEM.value, "content": content}


def human_message(content: str) -> dict[str, str]:
    """Build a human-role message."""
    return {"role": Role.HUMAN.value, "content": content}
