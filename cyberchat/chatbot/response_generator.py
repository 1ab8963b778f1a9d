"""
Response Composer
=================

Wraps base content with an opening and closing phrase chosen from the
follow-up flag, the question type and the detected sentiment.
"""

import random
import logging
from typing import Dict, List, Optional

from .base_core import IntentResult, QuestionType
from .dialog_state import ConversationContext

logger = logging.getLogger(__name__)

FOLLOW_UP_OPENINGS = [
    "Absolutely, {name}! Let's explore {topic} in more detail. ",
    "Great question! Here's more about {topic}: ",
    "I'd be happy to elaborate on {topic}, {name}. ",
    "Sure thing! {topic} is really important. ",
]

QUESTION_OPENINGS: Dict[QuestionType, List[str]] = {
    QuestionType.WHAT: [
        "That's a great question, {name}! ",
        "I'm happy to explain that, {name}. ",
        "Sure, {name}! Here's what you need to know: ",
    ],
    QuestionType.HOW: [
        "Great question! Here's how you can do that, {name}: ",
        "I'll walk you through it, {name}: ",
        "Here's a step-by-step approach, {name}: ",
    ],
    QuestionType.WHY: [
        "That's an important question, {name}. ",
        "Good thinking! Here's why, {name}: ",
        "Let me explain the reasoning, {name}: ",
    ],
}
GENERIC_QUESTION_OPENINGS = ["{name}, here's what I can tell you: "]

SENTIMENT_OPENINGS: Dict[str, List[str]] = {
    'worried': [
        "{name}, I completely understand your concern. ",
        "It's totally normal to feel that way, {name}. ",
        "I hear you, {name}, and that's a valid concern. ",
    ],
    'curious': [
        "I love your curiosity, {name}! ",
        "That's a great thing to ask about, {name}! ",
        "Excellent question, {name}! ",
    ],
    'frustrated': [
        "I can see this is frustrating, {name}. ",
        "Let me help simplify this for you, {name}. ",
        "Don't worry, {name}, I'm here to make this clearer. ",
    ],
}
DEFAULT_OPENINGS = [
    "{name}, here's what you should know: ",
    "Sure, {name}! ",
    "Great, {name}! ",
]

FOLLOW_UP_CLOSINGS = [
    " Feel free to ask if you'd like to know more!",
    " Is there anything specific you'd like to explore further?",
    " Let me know if you have any other questions!",
]

SENTIMENT_CLOSINGS: Dict[str, List[str]] = {
    'worried': [
        " Remember, taking these steps will help keep you safe online!",
        " You're taking the right steps by learning about this!",
        " Don't hesitate to ask if you need more guidance!",
    ],
    'curious': [
        " Feel free to ask if you want to dive deeper!",
        " I'm here if you have more questions!",
        " Let me know what else you'd like to learn about!",
    ],
    'frustrated': [
        " Take it one step at a time, you've got this!",
        " I'm here to help make this easier for you!",
        " Don't hesitate to ask if anything is still unclear!",
    ],
}
DEFAULT_CLOSINGS = [
    " Feel free to ask if you need more information!",
    " Let me know if you have any other questions!",
    " I'm here to help with anything else you'd like to know!",
]

CONTINUATION_FROM = "here's"
CONTINUATION_TO = "building on that, here's"
DEFAULT_TOPIC_NAME = "this topic"


class ResponseGenerator:
    """Composes final responses around base content."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def adjust_response(self, base_response: Optional[str], sentiment: Optional[str], is_follow_up: bool,
                        user_name: str, nlp_result: Optional[IntentResult] = None,
                        context: Optional[ConversationContext] = None,
                        topic_name: Optional[str] = None) -> Optional[str]:
        """
        Wrap base content with an opening and a closing phrase.

        Args:
            base_response: Content to wrap; None or empty returns None
            sentiment: Sentiment label driving the phrasing, if any
            is_follow_up: Whether the user asked to expand the current topic
            user_name: Name used in the phrases
            nlp_result: Classification of the utterance
            context: Conversation context, used for continuation phrasing
            topic_name: Display name of the current topic for follow-ups

        Returns:
            opening + base_response + closing
        """
        if not base_response:
            return None

        opening = self._generate_opening(user_name, sentiment, is_follow_up, nlp_result, context,
                                         topic_name or DEFAULT_TOPIC_NAME)
        closing = self._generate_closing(sentiment, is_follow_up)
        return f"{opening}{base_response}{closing}"

    def _generate_opening(self, user_name: str, sentiment: Optional[str], is_follow_up: bool,
                          nlp_result: Optional[IntentResult], context: Optional[ConversationContext],
                          topic_name: str) -> str:
        if is_follow_up:
            pool = FOLLOW_UP_OPENINGS
        elif nlp_result is not None and nlp_result.is_question:
            pool = QUESTION_OPENINGS.get(nlp_result.question_type, GENERIC_QUESTION_OPENINGS)
        else:
            pool = SENTIMENT_OPENINGS.get(sentiment, DEFAULT_OPENINGS)

        openings = [o.format(name=user_name, topic=topic_name) for o in pool]

        intent = nlp_result.intent if nlp_result is not None else ""
        if context is not None and context.is_topic_continuation(intent):
            openings = [o.replace(CONTINUATION_FROM, CONTINUATION_TO) for o in openings]

        return self.rng.choice(openings)

    def _generate_closing(self, sentiment: Optional[str], is_follow_up: bool) -> str:
        if is_follow_up:
            pool = FOLLOW_UP_CLOSINGS
        else:
            pool = SENTIMENT_CLOSINGS.get(sentiment, DEFAULT_CLOSINGS)
        return self.rng.choice(pool)

    @staticmethod
    def enhance_for_question(response: str, question_type: QuestionType) -> str:
        """Make content read as steps when the user asked how to do something."""
        if not response or question_type != QuestionType.HOW:
            return response

        if "step" in response or "first" in response or "then" in response:
            return response
        return response.replace(". ", ". Here's how: ")
