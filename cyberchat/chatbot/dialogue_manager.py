"""
Dialogue Manager for the Assistant

Routes each turn through a fixed priority chain:
- Mode handlers (quiz in progress, awaiting a reminder answer)
- Greetings and commands (quiz, tasks, activity log)
- Follow-ups, general knowledge and topic lookups
- Favorite-topic preference, default-to-favorite and fallback

All per-conversation state lives on a ``DialogueSession``; the manager
only holds shared, read-only collaborators.
"""

from typing import Callable, Dict, List, Optional
from dataclasses import dataclass, field
from datetime import datetime
import random
import re
import uuid

from .base_core import (
    IDialogueManager, DialogueMode, DialogueObserver, IntentResult, TurnResult, UserProfile, secure_logger
)
from .intent_recognizer import IntentRecognizer
from .sentiment_analyzer import SentimentAnalyzer
from .dialog_state import ConversationContext
from .response_generator import ResponseGenerator
from .fallback_handler import FallbackHandler
from ..config.config_manager import ConfigManager, get_config_manager
from ..content.data_loader import ContentStore
from ..error_handling import ErrorHandler
from ..managers import QuizManager, TaskManager, ActivityLogger

GREETING_WORDS = {"hello", "hi", "hey"}
GREETING_PREFIXES = ("good morning", "good afternoon", "good evening")

GREETING_TEMPLATES = [
    "Hello, {name}! I'm your cybersecurity assistant. I'm here to help you learn about online safety, "
    "passwords, phishing, privacy, and more. What would you like to know?",
    "Hi there, {name}! Welcome! I can help you with cybersecurity topics like password safety, avoiding "
    "scams, protecting your privacy, and general security questions. What interests you?",
    "Hey {name}! Great to meet you! I'm ready to help with any cybersecurity questions you have. You can "
    "ask about topics like 'passwords', 'phishing', 'privacy', or start a quiz with 'start quiz'. "
    "What would you like to explore?",
    "Greetings, {name}! I'm excited to help you learn about cybersecurity. Feel free to ask me anything "
    "about staying safe online, or try one of these: ask about 'passwords', learn about 'scams', explore "
    "'privacy', or say 'start quiz' to test your knowledge!",
]

# Command intents and the configuration alias lists that also trigger them.
COMMAND_ALIASES = {
    'start_quiz': "startQuiz",
    'add_task': "addTask",
    'remind_me': "remindMeTo",
    'view_tasks': "viewTasks",
    'view_log': "viewLog",
    'delete_task': "deleteTask",
    'complete_task': "completeTask",
}

PREFERENCE_PHRASES = ("favorite topic", "interested in")
PREFERENCE_FILLERS = re.compile(r'^(?:(?:(?:is|are)\b|[:\-])\s*)+')

LOST_TOPIC_MESSAGE = ("It seems we lost track of the topic. Please ask about a new topic like "
                      "'passwords', 'scams', or 'privacy'.")

SENTIMENT_CONFIDENCE_THRESHOLD = 0.3


@dataclass
class DialogueSession:
    """Mutable state of one conversation."""
    profile: UserProfile
    context: ConversationContext
    quiz: QuizManager
    tasks: TaskManager
    activity_log: ActivityLogger
    mode: DialogueMode = DialogueMode.IDLE
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    observers: List[DialogueObserver] = field(default_factory=list)

    @property
    def current_topic(self) -> Optional[str]:
        return self.context.current_topic

    def add_observer(self, observer: DialogueObserver):
        self.observers.append(observer)

    def remove_observer(self, observer: DialogueObserver):
        if observer in self.observers:
            self.observers.remove(observer)


class DialogueManager(IDialogueManager):
    """Turn router for the cybersecurity assistant."""

    def __init__(self, config_manager: Optional[ConfigManager] = None,
                 content: Optional[ContentStore] = None,
                 recognizer: Optional[IntentRecognizer] = None,
                 sentiment_analyzer: Optional[SentimentAnalyzer] = None,
                 response_generator: Optional[ResponseGenerator] = None,
                 fallback_handler: Optional[FallbackHandler] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.config = config_manager or get_config_manager()
        bot_settings = self.config.settings.settings

        self.rng = rng or random.Random()
        self.clock = clock
        self.content = content or ContentStore(data_dir=bot_settings.data_dir)
        self.recognizer = recognizer or IntentRecognizer()
        self.sentiment_analyzer = sentiment_analyzer or SentimentAnalyzer(self.config.settings.sentiment_keywords)
        self.response_generator = response_generator or ResponseGenerator(self.rng)
        self.fallback_handler = fallback_handler or FallbackHandler(
            topic_keywords=list(self.content.keyword_to_topic),
            knowledge_keys=list(self.content.general_knowledge)
        )
        self.error_handler = error_handler or ErrorHandler()

        self._command_handlers: Dict[str, Callable[..., TurnResult]] = {
            'start_quiz': self._handle_start_quiz,
            'add_task': self._handle_add_task,
            'remind_me': self._handle_add_task,
            'view_tasks': self._handle_view_tasks,
            'view_log': self._handle_view_log,
            'delete_task': self._handle_delete_task,
            'complete_task': self._handle_complete_task,
        }

        secure_logger.info("DialogueManager initialized", extra={
            'topics': len(self.content.topics),
            'quiz_questions': len(self.content.quiz_questions)
        })

    # Session lifecycle

    def create_session(self, user_name: Optional[str] = None, favorite_topic: Optional[str] = None,
                       session_id: Optional[str] = None) -> DialogueSession:
        """Create a session with its own context, quiz, tasks and activity log."""
        bot_settings = self.config.settings.settings
        session = DialogueSession(
            profile=UserProfile(user_name=self.config.get_default_user_name(), favorite_topic=""),
            context=ConversationContext(max_history=bot_settings.history_size, clock=self.clock),
            quiz=QuizManager(self.content.quiz_questions),
            tasks=TaskManager(clock=self.clock),
            activity_log=ActivityLogger(max_entries=bot_settings.activity_log_size, clock=self.clock)
        )
        if session_id:
            session.session_id = session_id

        self.set_user_details(session, user_name, favorite_topic)
        return session

    def set_user_details(self, session: DialogueSession, name: Optional[str], favorite_raw: Optional[str]):
        """Set name and favorite topic, falling back to the configured defaults."""
        session.profile.user_name = name.strip() if name and name.strip() else self.config.get_default_user_name()

        favorite = self._resolve_favorite(favorite_raw)
        if favorite is None:
            favorite = self._resolve_favorite(self.config.get_default_favorite_topic())
        session.profile.favorite_topic = favorite or ""

    def _resolve_favorite(self, raw: Optional[str]) -> Optional[str]:
        """Map a raw topic word to the first declared keyword of its topic."""
        if not raw:
            return None
        topic_key = self.content.get_topic_key(raw.lower().strip())
        if topic_key is None:
            return None
        return self.content.canonical_keyword(topic_key)

    def set_favorite_topic(self, session: DialogueSession, raw: str) -> bool:
        """Store a favorite topic keyword; returns False if it is not a known keyword."""
        keyword = self._find_topic_in_text(raw.lower().strip())
        if keyword is None:
            return False
        session.profile.favorite_topic = keyword
        return True

    def reset(self, session: DialogueSession):
        """Back to idle with an empty context. Tasks and the activity log are kept."""
        session.context.reset()
        session.quiz.stop()
        session.tasks.clear_pending()
        session.mode = DialogueMode.IDLE
        secure_logger.info("Session reset", extra={'session_id': session.session_id})

    # Turn processing

    def process_turn(self, session: DialogueSession, text: str) -> TurnResult:
        """
        Process one user utterance.

        Never raises: unexpected errors are recorded by the error handler
        and reported as an unrecognized turn with a safe message.
        """
        text = text or ""
        try:
            result = self._route(session, text)
        except Exception as e:
            message = self.error_handler.handle_error(e, {
                'service_name': 'dialogue_manager',
                'function_name': 'process_turn',
                'session_id': session.session_id,
                'mode': session.mode.value
            })
            session.context.add_turn(text, "", "unknown")
            result = TurnResult(recognized=False, response=message, mode=session.mode,
                                current_topic=session.context.current_topic)

        secure_logger.info("Turn processed", extra={
            'session_id': session.session_id,
            'intent': result.intent,
            'mode': result.mode.value,
            'recognized': result.recognized,
            'input_length': len(text)
        })
        for observer in session.observers:
            observer.on_response(result.recognized, result.response)
        return result

    def _route(self, session: DialogueSession, text: str) -> TurnResult:
        lower = text.lower().strip()
        nlp = self.recognizer.classify(text)

        if session.mode == DialogueMode.QUIZ_IN_PROGRESS:
            return self._handle_quiz_answer(session, text, nlp)

        if session.mode == DialogueMode.AWAITING_REMINDER_RESPONSE:
            return self._handle_reminder_response(session, text, nlp)

        if nlp.intent == "greeting" or lower in GREETING_WORDS or lower.startswith(GREETING_PREFIXES):
            return self._handle_greeting(session, text, nlp)

        command = nlp.intent if nlp.intent in self._command_handlers else self._match_command_alias(lower)
        if command is not None:
            return self._command_handlers[command](session, text, lower, nlp)

        if nlp.intent == "follow_up" or self._is_follow_up_phrase(session, lower):
            return self._handle_follow_up(session, text, lower, nlp)

        knowledge = self.content.get_general_knowledge_response(lower)
        if knowledge:
            session.context.current_topic = None
            session.activity_log.append(text, "Requested info on general knowledge topic")
            return self._respond_with_content(session, text, lower, nlp, knowledge)

        keyword = self.content.find_topic_keyword(lower, self.recognizer.matches_keyword)
        if keyword is not None:
            return self._handle_topic(session, text, lower, nlp, keyword)

        # reached only when no topic keyword was named
        if any(phrase in lower for phrase in PREFERENCE_PHRASES):
            return self._handle_favorite_topic(session, text, lower, nlp)

        favorite_key = self.content.get_topic_key(session.profile.favorite_topic)
        if session.context.current_topic is None and favorite_key and lower:
            base = self.content.get_topic_response(favorite_key, self.rng)
            if base:
                base = self.response_generator.enhance_for_question(base, nlp.question_type)
                return self._respond_with_content(session, text, lower, nlp, base,
                                                  topic_name=self.content.get_topic_name(favorite_key))

        return self._handle_fallback(session, text, nlp)

    # Mode handlers

    def _handle_quiz_answer(self, session: DialogueSession, text: str, nlp: IntentResult) -> TurnResult:
        name = session.profile.user_name
        answer = session.quiz.submit_answer(text, name)

        if not answer.valid:
            return self._finish(session, text, nlp, answer.message, recognized=False)

        session.activity_log.append(text, f"Answered quiz question (Correct: {answer.correct})")
        parts = [answer.message]

        if answer.complete:
            parts.append(session.quiz.final_score(name))
            session.activity_log.append("quiz complete", "Completed quiz")
            session.mode = DialogueMode.IDLE
        else:
            prompt = session.quiz.current_prompt(name)
            if prompt:
                parts.append(prompt)

        return self._finish(session, text, nlp, "\n".join(parts))

    def _handle_reminder_response(self, session: DialogueSession, text: str, nlp: IntentResult) -> TurnResult:
        reply = session.tasks.handle_reminder_response(text, session.profile.user_name)

        if reply.success:
            action = (f"Set reminder for {reply.reminder_date:%Y-%m-%d %H:%M}"
                      if reply.reminder_date else "Set no reminder")
            session.activity_log.append(text, action)
        if reply.resolved:
            session.mode = DialogueMode.IDLE

        return self._finish(session, text, nlp, reply.message, recognized=reply.success)

    # Greeting and commands

    def _handle_greeting(self, session: DialogueSession, text: str, nlp: IntentResult) -> TurnResult:
        greeting = self.rng.choice(GREETING_TEMPLATES).format(name=session.profile.user_name)
        session.activity_log.append(text, "Greeting received")
        return self._finish(session, text, nlp, greeting)

    def _match_command_alias(self, lower: str) -> Optional[str]:
        for intent, command in COMMAND_ALIASES.items():
            if command == "remindMeTo":
                if any(alias in lower for alias in self.config.get_command_aliases(command)):
                    return intent
            elif self.config.matches_command(lower, command):
                return intent
        return None

    def _handle_start_quiz(self, session: DialogueSession, text: str, lower: str,
                           nlp: IntentResult) -> TurnResult:
        session.quiz.start()
        prompt = session.quiz.current_prompt(session.profile.user_name)
        if prompt is None:
            session.quiz.stop()
            return self._finish(session, text, nlp, "Sorry, no quiz questions are available right now.",
                                recognized=False)

        session.mode = DialogueMode.QUIZ_IN_PROGRESS
        session.activity_log.append(text, "Started a quiz")
        return self._finish(session, text, nlp, prompt)

    def _handle_add_task(self, session: DialogueSession, text: str, lower: str,
                         nlp: IntentResult) -> TurnResult:
        created = session.tasks.add(text)
        if created.success:
            session.mode = DialogueMode.AWAITING_REMINDER_RESPONSE
            session.activity_log.append(text, f"Added task: {created.title}")
        return self._finish(session, text, nlp, created.message, recognized=created.success)

    def _handle_view_tasks(self, session: DialogueSession, text: str, lower: str,
                           nlp: IntentResult) -> TurnResult:
        task_list = session.tasks.list(session.profile.user_name)
        session.activity_log.append(text, "Viewed task list")
        return self._finish(session, text, nlp, task_list)

    def _handle_view_log(self, session: DialogueSession, text: str, lower: str,
                         nlp: IntentResult) -> TurnResult:
        log = session.activity_log.render(session.profile.user_name)
        session.activity_log.append(text, "Viewed activity log")
        return self._finish(session, text, nlp, log)

    def _handle_delete_task(self, session: DialogueSession, text: str, lower: str,
                            nlp: IntentResult) -> TurnResult:
        return self._handle_task_operation(session, text, lower, nlp, "deleteTask",
                                           session.tasks.delete, "Deleted task")

    def _handle_complete_task(self, session: DialogueSession, text: str, lower: str,
                              nlp: IntentResult) -> TurnResult:
        return self._handle_task_operation(session, text, lower, nlp, "completeTask",
                                           session.tasks.complete, "Completed task")

    def _handle_task_operation(self, session: DialogueSession, text: str, lower: str, nlp: IntentResult,
                               command: str, operation: Callable, action: str) -> TurnResult:
        name = session.profile.user_name
        index = self._parse_index(lower, command)
        if index is None:
            message = f"{name}, invalid task index. Use 'view tasks' to see your task list and try again."
            return self._finish(session, text, nlp, message, recognized=False, record_response=False)

        outcome = operation(index, name)
        if outcome.success:
            session.activity_log.append(text, f"{action}: {outcome.title}")
        return self._finish(session, text, nlp, outcome.message, recognized=outcome.success)

    def _parse_index(self, lower: str, command: str) -> Optional[int]:
        """Index after the first matching alias, else the last number in the text."""
        for alias in self.config.get_command_aliases(command):
            if lower.startswith(alias):
                return TaskManager.parse_task_index(lower, alias)

        numbers = re.findall(r'\d+', lower)
        return int(numbers[-1]) if numbers else None

    # Content paths

    def _is_follow_up_phrase(self, session: DialogueSession, lower: str) -> bool:
        if session.context.current_topic is None:
            return False
        return any(lower == phrase or phrase in lower for phrase in self.config.get_follow_up_keywords())

    def _handle_follow_up(self, session: DialogueSession, text: str, lower: str,
                          nlp: IntentResult) -> TurnResult:
        topic_key = self.content.get_topic_key(session.context.current_topic)
        if topic_key is None:
            return self._finish(session, text, nlp, LOST_TOPIC_MESSAGE, recognized=False)

        topic_name = self.content.get_topic_name(topic_key)
        base = self.content.get_topic_response(topic_key, self.rng)
        base = self.response_generator.enhance_for_question(base, nlp.question_type)
        session.activity_log.append(text, f"Requested more info on {topic_name}")
        return self._respond_with_content(session, text, lower, nlp, base, is_follow_up=True,
                                          topic_name=topic_name)

    def _handle_topic(self, session: DialogueSession, text: str, lower: str, nlp: IntentResult,
                      keyword: str) -> TurnResult:
        if session.context.current_topic != keyword:
            session.context.current_topic = keyword
            for observer in session.observers:
                observer.on_topic_changed(keyword)

        topic_key = self.content.get_topic_key(keyword)
        topic_name = self.content.get_topic_name(topic_key)
        base = self.content.get_topic_response(topic_key, self.rng)
        base = self.response_generator.enhance_for_question(base, nlp.question_type)
        session.activity_log.append(text, f"Requested info on {topic_name}")
        return self._respond_with_content(session, text, lower, nlp, base, topic_name=topic_name)

    def _find_topic_in_text(self, remainder: str) -> Optional[str]:
        """Exact topic keyword, else the first declared keyword the text contains."""
        if remainder in self.content.keyword_to_topic:
            return remainder
        return self.content.find_topic_keyword(remainder)

    def _handle_favorite_topic(self, session: DialogueSession, text: str, lower: str,
                               nlp: IntentResult) -> TurnResult:
        name = session.profile.user_name
        remainder = lower
        for phrase in PREFERENCE_PHRASES:
            if phrase in remainder:
                remainder = remainder.rsplit(phrase, 1)[1]
        remainder = PREFERENCE_FILLERS.sub("", remainder.strip()).strip(" .!?")

        if not remainder:
            topic_key = self.content.get_topic_key(session.profile.favorite_topic)
            if topic_key is None:
                message = f"{name}, you haven't picked a favorite topic yet. Try 'my favorite topic is privacy'."
            else:
                message = f"{name}, your favorite topic is {self.content.get_topic_name(topic_key)}."
            return self._finish(session, text, nlp, message)

        if self.set_favorite_topic(session, remainder):
            topic_name = self.content.get_topic_name_for_keyword(session.profile.favorite_topic)
            session.activity_log.append(text, f"Set favorite topic to {topic_name}")
            message = (f"Great, {name}! I'll remember that your favorite topic is {topic_name}. "
                       "It's a key area for staying safe online!")
            return self._finish(session, text, nlp, message)

        message = (f"{name}, I couldn't identify a valid topic. Please specify a topic like "
                   "'passwords', 'scams', or 'privacy' as your favorite.")
        return self._finish(session, text, nlp, message)

    def _handle_fallback(self, session: DialogueSession, text: str, nlp: IntentResult) -> TurnResult:
        message = self.fallback_handler.build_message(session.profile.user_name, nlp)
        return self._finish(session, text, nlp, message, recognized=False)

    # Composition

    def _detect_sentiment(self, session: DialogueSession, lower: str, nlp: IntentResult) -> Optional[str]:
        if not self.config.is_sentiment_analysis_enabled():
            return None
        if nlp.sentiment_indicators:
            return nlp.sentiment_indicators[0]

        scored = self.sentiment_analyzer.score_sentiment(lower)
        if scored.is_neutral or scored.confidence <= SENTIMENT_CONFIDENCE_THRESHOLD:
            return None

        for observer in session.observers:
            observer.on_sentiment_detected(scored.label)
        return scored.label

    def _respond_with_content(self, session: DialogueSession, text: str, lower: str, nlp: IntentResult,
                              base: Optional[str], is_follow_up: bool = False,
                              topic_name: Optional[str] = None) -> TurnResult:
        sentiment = None if is_follow_up else self._detect_sentiment(session, lower, nlp)

        # composed before the turn is recorded so continuation compares with the previous turn
        response = self.response_generator.adjust_response(
            base, sentiment, is_follow_up, session.profile.user_name,
            nlp_result=nlp, context=session.context, topic_name=topic_name
        )
        if response is None:
            return self._handle_fallback(session, text, nlp)

        return self._finish(session, text, nlp, response, sentiment=sentiment)

    def _finish(self, session: DialogueSession, text: str, nlp: IntentResult, response: str,
                recognized: bool = True, sentiment: Optional[str] = None,
                record_response: bool = True) -> TurnResult:
        """Record the turn and build the result."""
        session.context.add_turn(text, response if record_response else "", nlp.intent)
        return TurnResult(
            recognized=recognized,
            response=response,
            intent=nlp.intent,
            mode=session.mode,
            current_topic=session.context.current_topic,
            sentiment=sentiment
        )
