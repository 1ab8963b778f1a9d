"""
Chatbot Core Module
==================

Core chatbot engine responsible for conversation management,
intent processing, sentiment detection and response composition.
"""

from .base_core import (
    ChatbotCore, DialogueMode, DialogueObserver, IntentResult, QuestionType, SentimentResult, TurnResult,
    UserProfile
)
from .intent_recognizer import IntentRecognizer
from .sentiment_analyzer import SentimentAnalyzer
from .dialog_state import ConversationContext, DialogTurn
from .response_generator import ResponseGenerator
from .fallback_handler import FallbackHandler
from .dialogue_manager import DialogueManager, DialogueSession

__version__ = "1.0.0"

__all__ = [
    'ChatbotCore',
    'DialogueManager',
    'DialogueSession',
    'DialogueMode',
    'DialogueObserver',
    'IntentRecognizer',
    'IntentResult',
    'QuestionType',
    'SentimentAnalyzer',
    'SentimentResult',
    'ConversationContext',
    'DialogTurn',
    'ResponseGenerator',
    'FallbackHandler',
    'TurnResult',
    'UserProfile'
]
