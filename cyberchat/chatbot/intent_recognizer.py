"""
Simple Intent Recognition
========================

Rule-based intent, question-type, entity and keyword extraction for the
assistant. Patterns are plain data tables built once per recognizer.
"""

import re
from typing import Dict, List, Tuple

from .base_core import IIntentRecognizer, IntentResult, QuestionType

UNKNOWN_INTENT = "unknown"
GENERAL_QUERY = "general_query"

# Ordered: the first intent whose patterns match wins.
INTENT_PATTERNS: Dict[str, List[str]] = {
    'start_quiz': ["start quiz", "begin quiz", "take quiz", "quiz me", "test me"],
    'add_task': ["add task", "create task", "new task", "task:", "remind me to"],
    'view_tasks': ["view tasks", "show tasks", "list tasks", "my tasks", "tasks"],
    'delete_task': ["delete task", "remove task", "cancel task"],
    'complete_task': ["complete task", "finish task", "done task", "task done"],
    'view_log': ["view log", "show log", "activity log", "my log"],
    'remind_me': ["remind me", "set reminder", "reminder for"],
    'ask_about': ["tell me about", "what about", "info about", "information on", "learn about"],
    'explain': ["explain", "describe", "elaborate", "details", "more about"],
    'how_to': ["how to", "how do i", "how can i", "steps", "guide"],
    'what_is': ["what is", "what's", "what are", "define"],
    'follow_up': ["tell me more", "more info", "more information", "expand", "elaborate", "go on", "continue"],
    'set_favorite': ["favorite topic", "interested in", "prefer", "like", "favorite is"],
    'greeting': ["hello", "hi", "hey", "greetings", "good morning", "good afternoon", "good evening"],
}

# Intents matched on word boundaries only. Greeting phrases skip the substring
# match the other intents use, so "hi" does not fire inside "phishing".
WHOLE_WORD_INTENTS = {'greeting'}

QUESTION_PATTERNS: Dict[str, List[str]] = {
    'what_is': ["what is", "what's", "what are", "define", "definition", "explain"],
    'how_to': ["how to", "how do", "how can", "how should", "steps to", "way to"],
    'why': ["why", "reason", "because", "cause"],
    'when': ["when", "time", "schedule"],
    'where': ["where", "location", "place"],
    'who': ["who", "person", "people"],
}

SYNONYMS: Dict[str, List[str]] = {
    'password': ["password", "passcode", "pin", "passphrase", "credentials", "login"],
    'phishing': ["phishing", "scam", "fraud", "hoax", "trick", "deception"],
    'privacy': ["privacy", "private", "confidential", "personal", "secret"],
    'security': ["security", "secure", "safety", "protection", "safe", "defense"],
    'malware': ["malware", "virus", "trojan", "spyware", "ransomware", "adware"],
    'firewall': ["firewall", "barrier", "protection", "shield"],
    'hack': ["hack", "breach", "attack", "intrusion", "compromise", "exploit"],
    'encryption': ["encryption", "encrypt", "encrypted", "cipher", "encode"],
    'authentication': ["authentication", "auth", "login", "verify", "2fa", "two-factor", "mfa"],
    'browsing': ["browsing", "surfing", "web", "internet", "online"],
}

DOMAIN_KEYWORDS = [
    "password", "phishing", "scam", "privacy", "security", "malware", "firewall", "virus", "hack",
    "cybersecurity", "encryption", "2fa", "two-factor", "authentication", "browsing", "safe", "data",
    "breach", "identity",
]

SENTIMENT_INDICATORS: Dict[str, List[str]] = {
    'worried': ["worried", "concerned", "anxious", "nervous", "afraid", "scared"],
    'curious': ["curious", "interested", "wondering", "want to know", "tell me"],
    'frustrated': ["frustrated", "annoyed", "stuck", "confused", "don't understand", "can't figure out"],
    'excited': ["excited", "eager", "enthusiastic", "looking forward"],
    'grateful': ["thanks", "thank you", "appreciate", "helpful"],
}

STOP_WORDS = frozenset("""
    the a an and or but in on at to for of with by is are was were be been have has had do does did
    will would can could should may might must this that these those i you he she it we they me him
    her us them my your his its our their what which who whom whose where when why how about tell
    please thanks thank
""".split())

CONTRACTIONS: List[Tuple[str, str]] = [
    ("'t", " not"), ("'re", " are"), ("'ve", " have"), ("'ll", " will"),
    ("'d", " would"), ("'m", " am"), ("'s", " is"),
]

# Checked in order; the first rule that matches decides the type.
QUESTION_OPENERS: List[Tuple[QuestionType, Tuple[str, ...]]] = [
    (QuestionType.WHAT, ("what ", "what's ", "what is ", "what are ")),
    (QuestionType.HOW, ("how ", "how do ", "how can ", "how to ")),
    (QuestionType.WHY, ("why ",)),
    (QuestionType.WHEN, ("when ",)),
    (QuestionType.WHERE, ("where ",)),
    (QuestionType.WHO, ("who ",)),
]
YES_NO_OPENERS = ("can ", "should ", "is ", "are ", "do ", "does ")
CONFIDENCE_MARKERS = ("what", "how", "why", "when", "where")

NUMBER_PATTERN = re.compile(r'\b\d+\b')
KEYWORD_SPLIT = re.compile(r'[ ,.!?]+')


def normalize(text: str) -> str:
    """Collapse whitespace and expand common contractions."""
    normalized = re.sub(r'\s+', ' ', text).strip()
    for contraction, expansion in CONTRACTIONS:
        normalized = normalized.replace(contraction, expansion)
    return normalized


def extract_entities(lower_text: str) -> List[str]:
    """Domain keywords by containment, then standalone numbers."""
    entities = [keyword for keyword in DOMAIN_KEYWORDS if keyword in lower_text]
    entities.extend(NUMBER_PATTERN.findall(lower_text))
    return entities


def detect_question_type(lower_text: str) -> QuestionType:
    for question_type, openers in QUESTION_OPENERS:
        if lower_text.startswith(openers):
            return question_type

    if "?" in lower_text or lower_text.startswith(YES_NO_OPENERS):
        return QuestionType.YES_NO
    return QuestionType.NONE


def extract_sentiment_indicators(lower_text: str) -> List[str]:
    return [label for label, words in SENTIMENT_INDICATORS.items()
            if any(word in lower_text for word in words)]


def extract_keywords(lower_text: str) -> List[str]:
    """Content words: stop words and tokens of two characters or fewer removed."""
    return [word for word in KEYWORD_SPLIT.split(lower_text)
            if len(word) > 2 and word not in STOP_WORDS]


class IntentRecognizer(IIntentRecognizer):
    """Rule-based intent recognizer with synonym-aware keyword matching."""

    def __init__(self):
        """Initialize with the cybersecurity intent patterns."""
        self.intent_patterns: Dict[str, List[str]] = {k: list(v) for k, v in INTENT_PATTERNS.items()}
        self.question_patterns: Dict[str, List[str]] = {k: list(v) for k, v in QUESTION_PATTERNS.items()}
        self.synonyms: Dict[str, List[str]] = {k: list(v) for k, v in SYNONYMS.items()}
        self._word_regex: Dict[str, re.Pattern] = {}

    def classify(self, text: str) -> IntentResult:
        """
        Classify an utterance.

        Args:
            text: Raw user input

        Returns:
            IntentResult with intent, entities, question type and confidence
        """
        if not text or not text.strip():
            return IntentResult(intent=UNKNOWN_INTENT, confidence=0.0, original_input=text or "")

        normalized = normalize(text)
        lower = normalized.lower()

        intent = self._match_intent(lower)
        entities = extract_entities(lower)

        return IntentResult(
            intent=intent,
            confidence=self._calculate_confidence(intent, entities, lower),
            entities=tuple(entities),
            question_type=detect_question_type(lower),
            sentiment_indicators=tuple(extract_sentiment_indicators(lower)),
            keywords=tuple(extract_keywords(lower)),
            original_input=text,
            normalized_input=normalized
        )

    def _match_intent(self, lower_text: str) -> str:
        for intent, patterns in self.intent_patterns.items():
            whole_word = intent in WHOLE_WORD_INTENTS
            if any(self._matches_pattern(lower_text, p, whole_word) for p in patterns):
                return intent
        return GENERAL_QUERY

    def _matches_pattern(self, text: str, pattern: str, whole_word: bool = False) -> bool:
        """Exact match, containment, or whole-word match."""
        if text == pattern:
            return True
        if not whole_word and pattern in text:
            return True

        regex = self._word_regex.get(pattern)
        if regex is None:
            regex = re.compile(r'\b' + re.escape(pattern) + r'\b', re.IGNORECASE)
            self._word_regex[pattern] = regex
        return regex.search(text) is not None

    def _calculate_confidence(self, intent: str, entities: List[str], lower_text: str) -> float:
        confidence = 0.5
        if entities:
            confidence += 0.2
        if intent not in (GENERAL_QUERY, UNKNOWN_INTENT):
            confidence += 0.2
        if "?" in lower_text or lower_text.startswith(CONFIDENCE_MARKERS):
            confidence += 0.1
        return min(confidence, 1.0)

    def find_semantic_matches(self, keyword: str) -> List[str]:
        """The keyword plus every member of any synonym group it belongs to."""
        keyword = keyword.lower()
        matches = [keyword]
        for canonical, members in self.synonyms.items():
            if keyword == canonical or keyword in members:
                matches.extend(members)
        return list(dict.fromkeys(matches))

    def matches_keyword(self, text: str, keyword: str) -> bool:
        """True if the text contains the keyword or one of its synonyms."""
        lower = text.lower()
        return any(candidate in lower for candidate in self.find_semantic_matches(keyword))

    def add_intent_pattern(self, intent: str, pattern: str):
        """Add a new intent pattern; new intents are tried last."""
        if intent not in self.intent_patterns:
            self.intent_patterns[intent] = []
        self.intent_patterns[intent].append(pattern.lower())

    def get_supported_intents(self) -> List[str]:
        """Get list of supported intents in priority order."""
        return list(self.intent_patterns.keys())
