"""
Simple Dialog State Management
=============================

Bounded turn history and topic-continuity tracking for one conversation.
"""

from typing import Callable, List, Optional
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta

MAX_HISTORY_SIZE = 5


@dataclass(frozen=True)
class DialogTurn:
    """Single turn in a dialog."""
    user_input: str
    bot_response: str
    intent: str = ""
    timestamp: datetime = field(default_factory=datetime.now)


class ConversationContext:
    """
    Conversation context for a session.

    Keeps the last ``max_history`` turns, oldest evicted first, plus the
    current topic keyword and a turn counter.
    """

    def __init__(self, max_history: int = MAX_HISTORY_SIZE,
                 clock: Callable[[], datetime] = datetime.now):
        self.clock = clock
        self.turns: deque = deque(maxlen=max_history)
        self.current_topic: Optional[str] = None
        self.last_intent: Optional[str] = None
        self.last_interaction_time: datetime = clock()
        self.turn_count = 0

    def add_turn(self, user_input: str, bot_response: str, intent: str):
        """Add a turn to the dialog."""
        now = self.clock()
        self.turns.append(DialogTurn(user_input=user_input, bot_response=bot_response,
                                     intent=intent, timestamp=now))
        self.last_intent = intent
        self.last_interaction_time = now
        self.turn_count += 1

    def is_topic_continuation(self, new_intent: str) -> bool:
        """True if the latest turn had the same intent, or was ask_about before a follow_up."""
        if not self.turns:
            return False

        last = self.turns[-1]
        return last.intent == new_intent or (last.intent == "ask_about" and new_intent == "follow_up")

    def get_recent_history(self, count: int = 3) -> List[DialogTurn]:
        """Last ``count`` turns, oldest first."""
        if count <= 0:
            return []
        return list(self.turns)[-count:]

    def get_last_user_input(self) -> str:
        """Get the last user input."""
        if self.turns:
            return self.turns[-1].user_input
        return ""

    def get_conversation_history(self, limit: int = MAX_HISTORY_SIZE) -> List[str]:
        """Get conversation history as list of messages."""
        history = []
        for turn in self.get_recent_history(limit):
            history.append(f"User: {turn.user_input}")
            history.append(f"Bot: {turn.bot_response}")
        return history

    def time_since_last_interaction(self) -> timedelta:
        return self.clock() - self.last_interaction_time

    def reset(self):
        """Clear history, topic and counter; the context stays usable."""
        self.turns.clear()
        self.current_topic = None
        self.last_intent = None
        self.turn_count = 0
        self.last_interaction_time = self.clock()

    def __len__(self) -> int:
        return len(self.turns)
