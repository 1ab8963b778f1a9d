"""
Error Handling
==============

Exception hierarchy and turn-level error capture for the assistant.

Features:
- Error classification (severity and category)
- Bounded error history for diagnostics
- Safe user-facing messages so a turn never fails from the caller's view
"""

import logging
import time
import traceback
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    CONTENT = "content"
    DIALOGUE = "dialogue"
    UNKNOWN = "unknown"


class CyberChatError(Exception):
    """Base class for assistant errors."""
    pass


class ConfigurationError(CyberChatError):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


class ContentLoadError(CyberChatError):
    """Raised when a content file is missing or malformed."""
    pass


class TurnProcessingError(CyberChatError):
    """Raised when a dialogue turn cannot be routed."""
    pass


@dataclass
class ErrorInfo:
    """Detailed error information."""
    error_id: str
    error_type: str
    error_message: str
    severity: ErrorSeverity
    category: ErrorCategory

    # Context
    service_name: str
    function_name: str
    session_id: Optional[str] = None

    timestamp: datetime = field(default_factory=datetime.utcnow)

    stack_trace: Optional[str] = None
    context_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            "error_id": self.error_id,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "severity": self.severity.value,
            "category": self.category.value,
            "service_name": self.service_name,
            "function_name": self.function_name,
            "session_id": self.session_id,
            "timestamp": self.timestamp.isoformat(),
            "stack_trace": self.stack_trace,
            "context_data": self.context_data
        }


class ErrorHandler:
    """
    Records errors raised while processing a turn and turns them into
    a message the user can read.
    """

    DEFAULT_MESSAGE = ("Sorry, something went wrong while I was working on that. "
                       "Please try again or ask about another topic.")

    def __init__(self, history_size: int = 50, safe_message: Optional[str] = None):
        self.error_history: deque = deque(maxlen=history_size)
        self.safe_message = safe_message or self.DEFAULT_MESSAGE
        self.stats = {"total": 0, "by_category": {c.value: 0 for c in ErrorCategory}}

    def handle_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> str:
        """Record the error and return the safe user-facing message."""
        error_info = self._create_error_info(error, context or {})
        self.error_history.append(error_info)

        self.stats["total"] += 1
        self.stats["by_category"][error_info.category.value] += 1

        logger.error(f"Handling error: {error_info.error_id} - {error_info.error_message}", extra={
            "error_type": error_info.error_type,
            "severity": error_info.severity.value,
            "category": error_info.category.value,
            "session_id": error_info.session_id
        })

        return self.safe_message

    def _create_error_info(self, error: Exception, context: Dict[str, Any]) -> ErrorInfo:
        """Create error info from exception and context."""
        error_id = f"err_{int(time.time())}_{id(error)}"

        return ErrorInfo(
            error_id=error_id,
            error_type=type(error).__name__,
            error_message=str(error),
            severity=self._classify_severity(error),
            category=self._classify_category(error),
            service_name=context.get("service_name", "unknown"),
            function_name=context.get("function_name", "unknown"),
            session_id=context.get("session_id"),
            stack_trace=traceback.format_exc(),
            context_data=context
        )

    def _classify_severity(self, error: Exception) -> ErrorSeverity:
        """Classify error severity."""
        if isinstance(error, (ConfigurationError, ContentLoadError)):
            return ErrorSeverity.HIGH
        if isinstance(error, (ValueError, KeyError, IndexError)):
            return ErrorSeverity.MEDIUM
        if isinstance(error, CyberChatError):
            return ErrorSeverity.MEDIUM
        return ErrorSeverity.LOW

    def _classify_category(self, error: Exception) -> ErrorCategory:
        """Classify error category."""
        if isinstance(error, ConfigurationError):
            return ErrorCategory.CONFIGURATION
        if isinstance(error, ContentLoadError):
            return ErrorCategory.CONTENT
        if isinstance(error, TurnProcessingError):
            return ErrorCategory.DIALOGUE

        error_text = f"{type(error).__name__} {error}".lower()
        if any(p in error_text for p in ("validation", "invalid", "parse", "format")):
            return ErrorCategory.VALIDATION

        return ErrorCategory.UNKNOWN

    def get_recent_errors(self, limit: int = 10) -> List[ErrorInfo]:
        """Get the most recent recorded errors, oldest first."""
        return list(self.error_history)[-limit:]

    def get_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        return {
            **self.stats,
            "history_size": len(self.error_history)
        }


__all__ = [
    "ErrorSeverity", "ErrorCategory", "ErrorInfo", "ErrorHandler",
    "CyberChatError", "ConfigurationError", "ContentLoadError", "TurnProcessingError"
]
