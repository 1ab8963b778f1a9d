"""
Content Store
=============

Loads topic definitions, the quiz bank and general-knowledge entries from
JSON files, falling back to the built-in defaults on any load failure.
"""

import json
import random
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Callable
from dataclasses import dataclass, field

from .defaults import DEFAULT_TOPICS, DEFAULT_GENERAL_KNOWLEDGE, DEFAULT_QUIZ_QUESTIONS
from ..error_handling import ContentLoadError

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"


@dataclass
class TopicData:
    """A topic: display name, trigger keywords and candidate responses."""
    name: str
    keywords: List[str] = field(default_factory=list)
    responses: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "keywords": self.keywords, "responses": self.responses}


@dataclass
class QuizQuestion:
    """Multiple-choice quiz question with a zero-based correct answer index."""
    question: str
    options: List[str]
    correct_answer_index: int
    explanation: str = ""


class DataLoader:
    """Reads the JSON content files from a data directory."""

    TOPICS_FILE = "topics.json"
    QUIZ_FILE = "quiz_questions.json"
    KNOWLEDGE_FILE = "general_knowledge.json"

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR

    def _read_json(self, filename: str, root_key: str) -> Any:
        """Read a JSON file and return the value under its root key."""
        file_path = self.data_dir / filename
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ContentLoadError(f"Cannot read {file_path}: {e}") from e

        if not isinstance(data, dict) or root_key not in data:
            raise ContentLoadError(f"{file_path} has no '{root_key}' section")
        return data[root_key]

    def load_topics(self) -> Dict[str, TopicData]:
        """Load topics, or the defaults if the file is unusable."""
        try:
            raw = self._read_json(self.TOPICS_FILE, "topics")
            topics = self._parse_topics(raw)
            if not topics:
                raise ContentLoadError("no valid topics found")
            logger.info(f"Loaded {len(topics)} topics from {self.data_dir}")
            return topics
        except ContentLoadError as e:
            logger.warning(f"Using default topics: {e}")
            return self._parse_topics(DEFAULT_TOPICS)

    def load_quiz_questions(self) -> List[QuizQuestion]:
        """Load the quiz bank, or the defaults if the file is unusable."""
        try:
            raw = self._read_json(self.QUIZ_FILE, "questions")
            questions = self._parse_questions(raw)
            if not questions:
                raise ContentLoadError("no valid quiz questions found")
            logger.info(f"Loaded {len(questions)} quiz questions from {self.data_dir}")
            return questions
        except ContentLoadError as e:
            logger.warning(f"Using default quiz questions: {e}")
            return self._parse_questions(DEFAULT_QUIZ_QUESTIONS)

    def load_general_knowledge(self) -> Dict[str, str]:
        """Load general-knowledge entries, or the defaults if the file is unusable."""
        try:
            raw = self._read_json(self.KNOWLEDGE_FILE, "knowledge")
            if not isinstance(raw, dict):
                raise ContentLoadError("'knowledge' must be an object")
            knowledge = {k.lower(): v for k, v in raw.items()
                         if isinstance(k, str) and isinstance(v, str) and v.strip()}
            if not knowledge:
                raise ContentLoadError("no valid knowledge entries found")
            return knowledge
        except ContentLoadError as e:
            logger.warning(f"Using default general knowledge: {e}")
            return dict(DEFAULT_GENERAL_KNOWLEDGE)

    def _parse_topics(self, raw: Any) -> Dict[str, TopicData]:
        topics: Dict[str, TopicData] = {}
        if not isinstance(raw, dict):
            return topics

        for key, entry in raw.items():
            if not isinstance(entry, dict):
                logger.warning(f"Skipping malformed topic '{key}'")
                continue
            keywords = entry.get("keywords")
            responses = entry.get("responses")
            if not isinstance(keywords, list) or not isinstance(responses, list) or not responses:
                logger.warning(f"Skipping topic '{key}' without keywords or responses")
                continue
            topics[key] = TopicData(
                name=str(entry.get("name") or key),
                keywords=[k.lower().strip() for k in keywords if isinstance(k, str) and k.strip()],
                responses=[r for r in responses if isinstance(r, str) and r.strip()]
            )
        return topics

    def _parse_questions(self, raw: Any) -> List[QuizQuestion]:
        questions: List[QuizQuestion] = []
        if not isinstance(raw, list):
            return questions

        for i, entry in enumerate(raw):
            try:
                options = [str(o) for o in entry["options"]]
                index = int(entry["correct_answer_index"])
                if len(options) != 4 or not 0 <= index < len(options):
                    raise ValueError("expected four options and a valid answer index")
                questions.append(QuizQuestion(
                    question=str(entry["question"]),
                    options=options,
                    correct_answer_index=index,
                    explanation=str(entry.get("explanation", ""))
                ))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed quiz question #{i + 1}: {e}")
        return questions


class ContentStore:
    """
    Read-only content lookups shared by every session.

    ``keyword_to_topic`` keeps the declaration order of the topics and of
    the keywords inside each topic; topic lookup scans it in that order.
    """

    UNKNOWN_TOPIC_NAME = "this topic"

    def __init__(self, data_dir: Optional[str] = None, loader: Optional[DataLoader] = None):
        self.loader = loader or DataLoader(data_dir)

        self.topics: Dict[str, TopicData] = self.loader.load_topics()
        self.general_knowledge: Dict[str, str] = self.loader.load_general_knowledge()
        self.quiz_questions: List[QuizQuestion] = self.loader.load_quiz_questions()

        self.keyword_to_topic: Dict[str, str] = {}
        for topic_key, topic in self.topics.items():
            for keyword in topic.keywords:
                self.keyword_to_topic.setdefault(keyword, topic_key)

    def get_topic_key(self, keyword: Optional[str]) -> Optional[str]:
        if not keyword:
            return None
        return self.keyword_to_topic.get(keyword)

    def get_topic_name(self, topic_key: Optional[str]) -> str:
        topic = self.topics.get(topic_key) if topic_key else None
        return topic.name if topic else self.UNKNOWN_TOPIC_NAME

    def get_topic_name_for_keyword(self, keyword: Optional[str]) -> str:
        return self.get_topic_name(self.get_topic_key(keyword))

    def get_topic_response(self, topic_key: Optional[str],
                           rng: Optional[random.Random] = None) -> Optional[str]:
        """Pick one of the topic's responses at random."""
        topic = self.topics.get(topic_key) if topic_key else None
        if topic is None or not topic.responses:
            return None
        return (rng or random).choice(topic.responses)

    def get_general_knowledge_response(self, lower_input: str) -> Optional[str]:
        """Return the entry whose key occurs in the input, if any."""
        for key, text in self.general_knowledge.items():
            if key in lower_input:
                return text
        return None

    def find_topic_keyword(self, lower_input: str,
                           matcher: Optional[Callable[[str, str], bool]] = None) -> Optional[str]:
        """Return the first topic keyword the input mentions."""
        match = matcher or (lambda text, keyword: keyword in text)
        for keyword in self.keyword_to_topic:
            if match(lower_input, keyword):
                return keyword
        return None

    def canonical_keyword(self, topic_key: str) -> Optional[str]:
        """First declared keyword of a topic."""
        for keyword, key in self.keyword_to_topic.items():
            if key == topic_key:
                return keyword
        return None
