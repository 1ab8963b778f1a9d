"""
Unit Tests for Conversation Context
===================================
"""

from datetime import datetime, timedelta

import pytest

from cyberchat.chatbot import ConversationContext


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 3, 1, 12, 0)

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def context(clock):
    return ConversationContext(max_history=3, clock=clock)


class TestConversationContext:
    """Test turn history and topic continuity."""

    def test_history_is_bounded(self, context):
        for i in range(5):
            context.add_turn(f"input {i}", f"reply {i}", "general_query")

        assert len(context) == 3
        assert context.turn_count == 5
        assert [t.user_input for t in context.get_recent_history(3)] == ["input 2", "input 3", "input 4"]

    def test_recent_history_count(self, context):
        context.add_turn("a", "1", "x")
        context.add_turn("b", "2", "y")

        assert [t.user_input for t in context.get_recent_history(1)] == ["b"]
        assert context.get_recent_history(0) == []

    def test_continuation_same_intent(self, context):
        assert not context.is_topic_continuation("ask_about")

        context.add_turn("tell me about phishing", "...", "ask_about")

        assert context.is_topic_continuation("ask_about")
        assert context.is_topic_continuation("follow_up")
        assert not context.is_topic_continuation("greeting")

    def test_continuation_uses_latest_turn(self, context):
        context.add_turn("tell me about phishing", "...", "ask_about")
        context.add_turn("hello", "...", "greeting")

        assert not context.is_topic_continuation("ask_about")

    def test_conversation_history_lines(self, context):
        context.add_turn("hello", "hi there", "greeting")

        assert context.get_conversation_history() == ["User: hello", "Bot: hi there"]
        assert context.get_last_user_input() == "hello"

    def test_time_since_last_interaction(self, context, clock):
        context.add_turn("hello", "hi", "greeting")
        clock.now += timedelta(minutes=5)

        assert context.time_since_last_interaction() == timedelta(minutes=5)

    def test_reset(self, context):
        context.add_turn("hello", "hi", "greeting")
        context.current_topic = "password"
        context.reset()

        assert len(context) == 0
        assert context.current_topic is None
        assert context.turn_count == 0
        assert context.get_last_user_input() == ""
        assert not context.is_topic_continuation("greeting")
