"""
Fallback Handler for the Assistant

Builds the not-understood message: echoes up to three content keywords
from the utterance and lists what the assistant can do.
"""

from typing import Dict, Any, List, Optional

from .base_core import IFallbackHandler, IntentResult, secure_logger

MAX_ECHOED_KEYWORDS = 3


class FallbackHandler(IFallbackHandler):
    """Not-understood message builder."""

    def __init__(self, topic_keywords: Optional[List[str]] = None,
                 knowledge_keys: Optional[List[str]] = None):
        self.topic_keywords = list(topic_keywords or [])
        self.knowledge_keys = list(knowledge_keys or ["cybersecurity", "firewall", "malware"])
        self.metrics = {'fallbacks_triggered': 0, 'keywords_echoed': 0}

    def build_message(self, user_name: str, nlp_result: Optional[IntentResult] = None) -> str:
        message = f"I'm not sure I understand, {user_name}. "

        echoed = list(nlp_result.keywords[:MAX_ECHOED_KEYWORDS]) if nlp_result is not None else []
        if echoed:
            message += "I noticed you mentioned '" + "', '".join(echoed) + "'. "

        message += (
            "Can you try asking about '" + ", ".join(self.topic_keywords) + "', "
            "general topics like '" + "', '".join(self.knowledge_keys) + "', "
            "say 'tell me more' to expand on the last topic, tell me your 'favorite topic', "
            "start a quiz with 'start quiz', add a task with 'add task - [title]: [description]' "
            "or 'remind me to [task]', view tasks with 'view tasks', view log with 'view log', "
            "or rephrase your question? Let me know how you feel!"
        )

        self.metrics['fallbacks_triggered'] += 1
        self.metrics['keywords_echoed'] += len(echoed)
        secure_logger.info("Fallback triggered", extra={
            'intent': nlp_result.intent if nlp_result is not None else None,
            'keywords_echoed': len(echoed)
        })
        return message

    def get_metrics(self) -> Dict[str, Any]:
        return dict(self.metrics)
