"""
Unit Tests for Sentiment Analysis
=================================
"""

import pytest

from cyberchat.chatbot import SentimentAnalyzer


@pytest.fixture
def analyzer():
    return SentimentAnalyzer()


class TestScoring:
    """Test weighted keyword scoring."""

    def test_plain_keyword(self, analyzer):
        result = analyzer.score_sentiment("I am worried about my account")

        assert result.label == "worried"
        assert result.confidence == pytest.approx(0.2)

    def test_intensifier_boosts(self, analyzer):
        result = analyzer.score_sentiment("I am very worried")
        assert result.confidence == pytest.approx(0.3)

    def test_negation_flips(self, analyzer):
        result = analyzer.score_sentiment("I am not worried at all")

        assert result.is_neutral
        assert result.confidence == 0.0

    def test_empty_is_neutral(self, analyzer):
        assert analyzer.score_sentiment("").label == "neutral"

    def test_highest_label_wins(self, analyzer):
        result = analyzer.score_sentiment("I am curious but scared")

        assert result.label == "worried"
        assert result.all_scores == {"worried": 2.5, "curious": 1.5}

    def test_tie_goes_to_first_label(self):
        analyzer = SentimentAnalyzer({"a": ["alpha"], "b": ["beta"]})
        assert analyzer.score_sentiment("alpha beta").label == "a"

    def test_confidence_capped(self):
        analyzer = SentimentAnalyzer({"calm": ["ok"]}, keyword_weights={"ok": 25.0})
        assert analyzer.score_sentiment("ok").confidence == 1.0


class TestMetrics:
    """Test history and distribution bookkeeping."""

    def test_distribution_and_trend(self, analyzer):
        analyzer.analyze("I am stuck")
        analyzer.analyze("nothing here")
        analyzer.analyze("still stuck")

        metrics = analyzer.get_metrics()
        assert metrics['analyses_performed'] == 3
        assert metrics['sentiment_distribution']['frustrated'] == 2
        assert metrics['sentiment_distribution']['neutral'] == 1
        assert analyzer.get_sentiment_trend(window=2) == {"neutral": 1, "frustrated": 1}

    def test_history_bounded(self):
        analyzer = SentimentAnalyzer(max_history_size=2)
        for _ in range(5):
            analyzer.analyze("worried")
        assert analyzer.get_metrics()['history_size'] == 2

    def test_scoring_records_nothing(self, analyzer):
        analyzer.score_sentiment("I am worried")
        analyzer.score_sentiment("I am stuck")

        assert analyzer.get_metrics()['analyses_performed'] == 0
        assert analyzer.get_metrics()['history_size'] == 0
