"""Domain models for users, activity and messaging."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class UserProfile:
    """Subset of the user profile used by the client."""

    id: str
    name: str | None
    food_allergies: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ActivityLog:
    """Daily activity log."""

    date: date
    steps: int
    calories_burned: float
    water_intake: float
    sleep_hours: float


@dataclass(frozen=True)
class Conversation:
    """Conversation summary in the inbox."""

    id: str
    participant_name: str
    last_message: str | None
    last_message_at: datetime | None
    unread_count: int


@dataclass(frozen=True)
class ChatMessage:
    """Message within a conversation."""

    id: str
    conversation_id: str
    sender_id: str
    content: str
    created_at: datetime
