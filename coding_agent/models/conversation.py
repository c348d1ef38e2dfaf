"""In-memory conversation history."""

from collections.abc import Iterator

from coding_agent.models.llm import LLMMessage


class Conversation:
    """Ordered, append-only list of messages exchanged with the model.

    Past messages are never removed, reordered or replaced. Callers get
    immutable snapshots through ``messages``.
    """

    def __init__(self) -> None:
        self._messages: list[LLMMessage] = []

    def append(self, message: LLMMessage) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> tuple[LLMMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[LLMMessage]:
        return iter(self.messages)
