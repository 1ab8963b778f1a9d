"""
Unit Tests for Response Composition
===================================
"""

import random

import pytest

from cyberchat.chatbot import (
    ConversationContext, FallbackHandler, IntentResult, QuestionType, ResponseGenerator
)
from cyberchat.chatbot.response_generator import (
    DEFAULT_CLOSINGS, DEFAULT_OPENINGS, FOLLOW_UP_CLOSINGS, SENTIMENT_OPENINGS
)

BASE = "Use a password manager."


@pytest.fixture
def generator():
    return ResponseGenerator(random.Random(3))


def openings(pool, name="Sam", topic="this topic"):
    return [o.format(name=name, topic=topic) for o in pool]


class TestAdjustResponse:
    """Test opening and closing selection."""

    def test_empty_base_returns_none(self, generator):
        assert generator.adjust_response(None, None, False, "Sam") is None
        assert generator.adjust_response("", "worried", False, "Sam") is None

    def test_default_wrapping(self, generator):
        response = generator.adjust_response(BASE, None, False, "Sam")

        assert BASE in response
        assert any(response.startswith(o) for o in openings(DEFAULT_OPENINGS))
        assert any(response.endswith(c) for c in DEFAULT_CLOSINGS)

    def test_sentiment_opening(self, generator):
        response = generator.adjust_response(BASE, "worried", False, "Sam")
        assert any(response.startswith(o) for o in openings(SENTIMENT_OPENINGS['worried']))

    def test_follow_up_mentions_topic(self, generator):
        response = generator.adjust_response(BASE, None, True, "Sam", topic_name="Password Safety")

        assert any(response.endswith(c) for c in FOLLOW_UP_CLOSINGS)
        assert "Password Safety" in response

    def test_question_opening_uses_name(self, generator):
        nlp = IntentResult(intent="how_to", confidence=0.8, question_type=QuestionType.HOW)
        response = generator.adjust_response(BASE, None, False, "Sam", nlp_result=nlp)
        assert "Sam" in response

    def test_continuation_rewrites_heres(self):
        context = ConversationContext()
        context.add_turn("firewall stuff", "...", "general_query")
        nlp = IntentResult(intent="general_query", confidence=0.5)

        seen = set()
        for seed in range(30):
            generator = ResponseGenerator(random.Random(seed))
            seen.add(generator.adjust_response(BASE, None, False, "Sam", nlp_result=nlp, context=context))

        assert any(r.startswith("Sam, building on that, here's what you should know: ") for r in seen)
        assert not any(r.startswith("Sam, here's what") for r in seen)


class TestEnhanceForQuestion:
    """Test step phrasing for how-to questions."""

    def test_how_question(self):
        enhanced = ResponseGenerator.enhance_for_question("Pick a phrase. Add symbols.", QuestionType.HOW)
        assert enhanced == "Pick a phrase. Here's how: Add symbols."

    def test_already_stepwise(self):
        text = "Pick a phrase, then add symbols. Done."
        assert ResponseGenerator.enhance_for_question(text, QuestionType.HOW) == text

    def test_other_question_types_unchanged(self):
        text = "Pick a phrase. Add symbols."
        assert ResponseGenerator.enhance_for_question(text, QuestionType.WHAT) == text
        assert ResponseGenerator.enhance_for_question(None, QuestionType.HOW) is None


class TestFallbackHandler:
    """Test the not-understood message."""

    def test_echoes_first_three_keywords(self):
        handler = FallbackHandler(topic_keywords=["password", "scam"])
        nlp = IntentResult(intent="general_query", confidence=0.5,
                           keywords=("gardening", "tomatoes", "compost", "worms"))

        message = handler.build_message("Sam", nlp)

        assert message.startswith("I'm not sure I understand, Sam. "
                                  "I noticed you mentioned 'gardening', 'tomatoes', 'compost'. ")
        assert "'password, scam'" in message
        assert "'cybersecurity', 'firewall', 'malware'" in message
        assert handler.get_metrics() == {'fallbacks_triggered': 1, 'keywords_echoed': 3}

    def test_without_keywords(self):
        message = FallbackHandler().build_message("Sam")
        assert "I noticed" not in message
