"""
Sentiment Analysis for the Assistant

Weighted keyword scoring over a small set of configured labels with:
- Per-keyword weights (more specific words weigh more)
- Intensifier and negation adjustment from the text preceding a keyword
- Bounded result history and simple distribution metrics
"""

from typing import Dict, Any, List, Optional
from collections import deque
import copy

from .base_core import ISentimentAnalyzer, SentimentResult, NEUTRAL, secure_logger

DEFAULT_SENTIMENT_KEYWORDS: Dict[str, List[str]] = {
    'worried': ["worried", "scared", "anxious", "nervous", "afraid", "concerned"],
    'curious': ["curious", "interested", "wondering", "want to know", "tell me"],
    'frustrated': ["frustrated", "annoyed", "stuck", "confused", "don't understand"],
}

DEFAULT_KEYWORD_WEIGHTS: Dict[str, float] = {
    'worried': 2.0, 'scared': 2.5, 'anxious': 2.0, 'nervous': 1.5,
    'curious': 1.5, 'interested': 1.0, 'wondering': 1.0,
    'frustrated': 2.0, 'annoyed': 1.5, 'stuck': 1.0,
}

INTENSIFIERS = ["very", "extremely", "really", "quite", "so"]
NEGATIONS = ["not", "no", "never", "don't", "doesn't", "isn't"]

INTENSIFIER_WINDOW = 15
NEGATION_WINDOW = 10
INTENSIFIER_FACTOR = 1.5
NEGATION_FACTOR = -0.5


class SentimentAnalyzer(ISentimentAnalyzer):
    """Keyword-weighted sentiment scorer."""

    def __init__(self, sentiment_keywords: Optional[Dict[str, List[str]]] = None,
                 keyword_weights: Optional[Dict[str, float]] = None,
                 max_history_size: int = 100):
        """Initialize the sentiment analyzer. Label order decides ties."""
        self.sentiment_keywords = copy.deepcopy(sentiment_keywords or DEFAULT_SENTIMENT_KEYWORDS)
        self.keyword_weights = dict(keyword_weights or DEFAULT_KEYWORD_WEIGHTS)

        self.sentiment_history: deque = deque(maxlen=max_history_size)
        self.metrics = {
            'analyses_performed': 0,
            'sentiment_distribution': {label: 0 for label in [*self.sentiment_keywords, NEUTRAL]}
        }

        secure_logger.debug("SentimentAnalyzer initialized", extra={
            'labels': list(self.sentiment_keywords.keys())
        })

    def score_sentiment(self, text: str) -> SentimentResult:
        """
        Score text against every configured label.

        Args:
            text: Text to analyze

        Returns:
            The highest positive label, or neutral when no label scores above zero.
            Scoring keeps no state; use ``analyze`` to also record the result.
        """
        if not text or not text.strip():
            return SentimentResult(label=NEUTRAL, confidence=0.0)

        lower = text.lower()
        scores: Dict[str, float] = {}
        for label in self.sentiment_keywords:
            score = self._calculate_label_score(lower, label)
            if score > 0:
                scores[label] = score

        if not scores:
            return SentimentResult(label=NEUTRAL, confidence=0.0)

        # max() keeps the first of equal values, so ties go to the earlier label
        top_label = max(scores, key=lambda label: scores[label])
        confidence = min(scores[top_label] / 10.0, 1.0)

        return SentimentResult(label=top_label, confidence=confidence, all_scores=scores)

    def _calculate_label_score(self, lower_text: str, label: str) -> float:
        score = 0.0
        for keyword in self.sentiment_keywords[label]:
            position = lower_text.find(keyword)
            if position == -1:
                continue

            weight = self.keyword_weights.get(keyword, 1.0)
            if self._preceded_by(lower_text, position, INTENSIFIERS, INTENSIFIER_WINDOW):
                weight *= INTENSIFIER_FACTOR
            if self._preceded_by(lower_text, position, NEGATIONS, NEGATION_WINDOW):
                weight *= NEGATION_FACTOR
            score += weight
        return score

    @staticmethod
    def _preceded_by(lower_text: str, position: int, words: List[str], window: int) -> bool:
        """True if any of the words occurs in the ``window`` characters before ``position``."""
        before = lower_text[max(0, position - window):position]
        return any(word in before for word in words)

    def analyze(self, text: str) -> SentimentResult:
        """Score text and record the result in this analyzer's history and metrics."""
        result = self.score_sentiment(text)
        self.sentiment_history.append(result)
        self.metrics['analyses_performed'] += 1
        distribution = self.metrics['sentiment_distribution']
        distribution[result.label] = distribution.get(result.label, 0) + 1
        return result

    def get_sentiment_trend(self, window: int = 10) -> Dict[str, int]:
        """Label counts over the most recent results."""
        trend: Dict[str, int] = {}
        for result in list(self.sentiment_history)[-window:]:
            trend[result.label] = trend.get(result.label, 0) + 1
        return trend

    def get_metrics(self) -> Dict[str, Any]:
        return {
            **self.metrics,
            'history_size': len(self.sentiment_history)
        }
