"""
Chatbot Core Module
==================

Shared types, collaborator interfaces and the session-holding facade of
the assistant.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Any, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timedelta
import threading
import logging

logger = logging.getLogger(__name__)

# Package-wide logger for structured events. Callers pass metadata through
# ``extra``; raw user text is never attached at INFO level.
secure_logger = logging.getLogger("cyberchat")


class QuestionType(Enum):
    """Kind of question an utterance asks."""
    NONE = "none"
    WHAT = "what"
    HOW = "how"
    WHY = "why"
    WHEN = "when"
    WHERE = "where"
    WHO = "who"
    YES_NO = "yes_no"


class DialogueMode(Enum):
    """Mutually exclusive router modes."""
    IDLE = "idle"
    QUIZ_IN_PROGRESS = "quiz_in_progress"
    AWAITING_REMINDER_RESPONSE = "awaiting_reminder_response"


NEUTRAL = "neutral"


@dataclass(frozen=True)
class IntentResult:
    """Classification of a single utterance."""
    intent: str
    confidence: float
    entities: Tuple[str, ...] = ()
    question_type: QuestionType = QuestionType.NONE
    sentiment_indicators: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()
    original_input: str = ""
    normalized_input: str = ""

    @property
    def is_question(self) -> bool:
        return self.question_type != QuestionType.NONE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'intent': self.intent,
            'confidence': self.confidence,
            'entities': list(self.entities),
            'question_type': self.question_type.value,
            'sentiment_indicators': list(self.sentiment_indicators),
            'keywords': list(self.keywords),
            'is_question': self.is_question
        }


@dataclass
class SentimentResult:
    """Weighted sentiment score for an utterance."""
    label: str
    confidence: float
    all_scores: Dict[str, float] = field(default_factory=dict)

    @property
    def is_neutral(self) -> bool:
        return self.label == NEUTRAL

    def to_dict(self) -> Dict[str, Any]:
        return {'label': self.label, 'confidence': self.confidence, 'all_scores': dict(self.all_scores)}


@dataclass
class UserProfile:
    user_name: str
    favorite_topic: str


@dataclass
class TurnResult:
    """
    Outcome of one dialogue turn.

    Unpacks as ``(recognized, response)``::

        recognized, response = manager.process_turn(session, "start quiz")
    """
    recognized: bool
    response: str
    intent: str = "unknown"
    mode: DialogueMode = DialogueMode.IDLE
    current_topic: Optional[str] = None
    sentiment: Optional[str] = None

    def __iter__(self):
        yield self.recognized
        yield self.response

    def to_dict(self) -> Dict[str, Any]:
        return {
            'recognized': self.recognized,
            'response': self.response,
            'intent': self.intent,
            'mode': self.mode.value,
            'current_topic': self.current_topic,
            'sentiment': self.sentiment
        }


class IIntentRecognizer(ABC):
    """Interface for utterance classifiers."""

    @abstractmethod
    def classify(self, text: str) -> IntentResult:
        pass

    @abstractmethod
    def matches_keyword(self, text: str, keyword: str) -> bool:
        pass


class ISentimentAnalyzer(ABC):
    """Interface for sentiment scorers."""

    @abstractmethod
    def score_sentiment(self, text: str) -> SentimentResult:
        pass


class IFallbackHandler(ABC):
    """Interface for not-understood message builders."""

    @abstractmethod
    def build_message(self, user_name: str, nlp_result: Optional[IntentResult] = None) -> str:
        pass


class IDialogueManager(ABC):
    """Interface for the turn router."""

    @abstractmethod
    def create_session(self, user_name: Optional[str] = None,
                       favorite_topic: Optional[str] = None) -> Any:
        pass

    @abstractmethod
    def process_turn(self, session: Any, text: str) -> TurnResult:
        pass

    @abstractmethod
    def set_user_details(self, session: Any, name: Optional[str], favorite_raw: Optional[str]):
        pass

    @abstractmethod
    def reset(self, session: Any):
        pass


class DialogueObserver:
    """
    Optional per-session observer. Override the callbacks of interest;
    the defaults do nothing.
    """

    def on_response(self, recognized: bool, response: str):
        pass

    def on_sentiment_detected(self, sentiment: str):
        pass

    def on_topic_changed(self, topic: str):
        pass


class ChatbotCore:
    """
    Core chatbot engine.

    Holds one dialogue session per session id and serializes turns with a
    lock. At most
    ``max_sessions`` sessions are kept; the least recently used one is
    dropped to make room for a new id.
    """

    def __init__(self, dialogue_manager: Optional[IDialogueManager] = None, max_sessions: int = 1000,
                 clock: Callable[[], datetime] = datetime.now):
        """
        Initialize the chatbot core.

        Args:
            dialogue_manager: Router to use; a default one is built from
                the global configuration when omitted.
            max_sessions: Upper bound on sessions held in memory
            clock: Time source for session expiry
        """
        if dialogue_manager is None:
            from .dialogue_manager import DialogueManager
            dialogue_manager = DialogueManager()

        self.dialogue_manager = dialogue_manager
        self.max_sessions = max(1, max_sessions)
        self.clock = clock
        self.sessions: Dict[str, Any] = {}
        self.last_access: Dict[str, datetime] = {}
        self._lock = threading.Lock()

        logger.info("Chatbot Core initialized")

    def get_session(self, session_id: str = "default") -> Any:
        """Get existing session or create a new one."""
        if session_id not in self.sessions:
            if len(self.sessions) >= self.max_sessions:
                oldest = min(self.last_access, key=self.last_access.get)
                self._drop_session(oldest)
                secure_logger.info("Session evicted", extra={"session_id": oldest})

            self.sessions[session_id] = self.dialogue_manager.create_session()
            secure_logger.info("Session created", extra={"session_id": session_id})

        self.last_access[session_id] = self.clock()
        return self.sessions[session_id]

    def _drop_session(self, session_id: str):
        self.sessions.pop(session_id, None)
        self.last_access.pop(session_id, None)

    def process_turn(self, text: str, session_id: str = "default") -> TurnResult:
        """Process one utterance for the given session."""
        with self._lock:
            session = self.get_session(session_id)
            return self.dialogue_manager.process_turn(session, text)

    def set_user_details(self, name: Optional[str], favorite_topic: Optional[str],
                         session_id: str = "default"):
        with self._lock:
            session = self.get_session(session_id)
            self.dialogue_manager.set_user_details(session, name, favorite_topic)

    def reset(self, session_id: str = "default"):
        with self._lock:
            if session_id in self.sessions:
                self.dialogue_manager.reset(self.sessions[session_id])

    def cleanup_old_sessions(self, max_age_hours: int = 24) -> int:
        """Clean up sessions idle for longer than ``max_age_hours``."""
        cutoff_time = self.clock() - timedelta(hours=max_age_hours)
        with self._lock:
            old_sessions = [
                session_id for session_id, accessed in self.last_access.items()
                if accessed < cutoff_time
            ]

            for session_id in old_sessions:
                self._drop_session(session_id)

        return len(old_sessions)

    def list_sessions(self) -> List[str]:
        return list(self.sessions.keys())

    def get_status(self) -> Dict[str, Any]:
        """
        Get chatbot core status.

        Returns:
            Dict containing status information
        """
        return {
            'sessions': len(self.sessions),
            'max_sessions': self.max_sessions,
            'dialogue_manager': type(self.dialogue_manager).__name__
        }
