"""
Unit Tests for Intent Recognition
=================================

Intent priority, whole-word greetings, question typing, entity and
keyword extraction, and synonym-aware keyword matching.
"""

import pytest

from cyberchat.chatbot import IntentRecognizer, QuestionType
from cyberchat.chatbot.intent_recognizer import extract_keywords, normalize


@pytest.fixture
def recognizer():
    return IntentRecognizer()


class TestClassification:
    """Test intent selection."""

    @pytest.mark.parametrize("text,intent", [
        ("start quiz", "start_quiz"),
        ("remind me to update my password", "add_task"),
        ("view tasks", "view_tasks"),
        ("delete task -1", "delete_task"),
        ("complete task -2", "complete_task"),
        ("show log", "view_log"),
        ("tell me about phishing", "ask_about"),
        ("tell me more", "follow_up"),
        ("hello there", "greeting"),
    ])
    def test_intents(self, recognizer, text, intent):
        assert recognizer.classify(text).intent == intent

    def test_greeting_is_whole_word(self, recognizer):
        """'hi' inside 'phishing' is not a greeting."""
        assert recognizer.classify("phishing").intent == "general_query"

    def test_empty_input(self, recognizer):
        result = recognizer.classify("   ")

        assert result.intent == "unknown"
        assert result.confidence == 0.0

    def test_confidence(self, recognizer):
        result = recognizer.classify("What is phishing?")

        assert result.intent == "what_is"
        assert result.confidence == pytest.approx(1.0)
        assert recognizer.classify("blue sky").confidence == pytest.approx(0.5)

    def test_added_pattern_is_tried_last(self, recognizer):
        recognizer.add_intent_pattern("vpn_help", "VPN")

        assert recognizer.classify("vpn setup").intent == "vpn_help"
        assert recognizer.get_supported_intents()[-1] == "vpn_help"


class TestExtraction:
    """Test question type, entities, keywords and normalization."""

    @pytest.mark.parametrize("text,question_type", [
        ("what is malware", QuestionType.WHAT),
        ("how do i make a password", QuestionType.HOW),
        ("why use 2fa", QuestionType.WHY),
        ("is this safe", QuestionType.YES_NO),
        ("passwords matter?", QuestionType.YES_NO),
        ("passwords matter", QuestionType.NONE),
    ])
    def test_question_type(self, recognizer, text, question_type):
        assert recognizer.classify(text).question_type == question_type

    def test_entities_include_numbers(self, recognizer):
        result = recognizer.classify("my password leaked 2 times")

        assert "password" in result.entities
        assert "2" in result.entities

    def test_contractions_expanded(self):
        assert normalize("I  can't   log in") == "I can not log in"

    def test_keywords_drop_stop_words(self):
        assert extract_keywords("tell me about the firewall, please") == ["firewall"]

    def test_sentiment_indicators(self, recognizer):
        result = recognizer.classify("I'm worried and confused")
        assert result.sentiment_indicators == ("worried", "frustrated")


class TestKeywordMatching:
    """Test synonym-aware keyword matching."""

    def test_semantic_matches_are_distinct(self, recognizer):
        matches = recognizer.find_semantic_matches("login")

        assert matches[0] == "login"
        assert len(matches) == len(set(matches))
        assert "passcode" in matches
        assert "2fa" in matches

    def test_matches_synonym(self, recognizer):
        assert recognizer.matches_keyword("how do I avoid a scam", "phishing")
        assert not recognizer.matches_keyword("nice weather", "phishing")
