"""Polling views over coach conversations."""

import logging
from dataclasses import dataclass, field

from nutrition_dashboard.adapters.api_gateway import ApiGateway
from nutrition_dashboard.domain.models import ChatMessage, Conversation
from nutrition_dashboard.services.scheduling import Poller, ScreenLifetime

_logger = logging.getLogger(__name__)


@dataclass
class ConversationListScreen:
    """Inbox refreshed on a fixed interval while mounted."""

    gateway: ApiGateway
    poll_seconds: float = 15
    conversations: list[Conversation] = field(default_factory=list)
    lifetime: ScreenLifetime = field(default_factory=ScreenLifetime)

    @property
    def unread_total(self) -> int:
        return sum(conversation.unread_count for conversation in self.conversations)

    def mount(self) -> Poller:
        """Start polling; the poller is stopped on unmount."""
        self.lifetime.mount()
        poller = Poller(self.poll_seconds, self.load, name="conversations")
        self.lifetime.own(poller)
        poller.start()
        return poller

    async def unmount(self) -> None:
        await self.lifetime.unmount()

    async def load(self) -> None:
        conversations = await self.gateway.list_conversations()
        self.lifetime.guard(self._set)(conversations)

    def _set(self, conversations: list[Conversation]) -> None:
        self.conversations = conversations


@dataclass
class ConversationScreen:
    """Open conversation refreshed on a fixed interval while mounted."""

    gateway: ApiGateway
    conversation_id: str
    poll_seconds: float = 5
    messages: list[ChatMessage] = field(default_factory=list)
    lifetime: ScreenLifetime = field(default_factory=ScreenLifetime)

    def mount(self) -> Poller:
        self.lifetime.mount()
        poller = Poller(
            self.poll_seconds, self.load, name=f"conversation:{self.conversation_id}"
        )
        self.lifetime.own(poller)
        poller.start()
        return poller

    async def unmount(self) -> None:
        await self.lifetime.unmount()

    async def load(self) -> None:
        messages = await self.gateway.get_messages(self.conversation_id)
        self.lifetime.guard(self._set)(messages)

    def _set(self, messages: list[ChatMessage]) -> None:
        if len(messages) != len(self.messages):
            _logger.debug(
                "Conversation %s now has %s messages",
                self.conversation_id,
                len(messages),
            )
        self.messages = messages
