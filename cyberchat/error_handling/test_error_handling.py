"""
Unit Tests for Error Handling
=============================
"""

from cyberchat.error_handling import (
    ContentLoadError, ErrorCategory, ErrorHandler, ErrorSeverity, TurnProcessingError
)


class TestErrorHandler:
    """Test error capture and classification."""

    def test_returns_safe_message(self):
        handler = ErrorHandler(safe_message="Oops.")
        assert handler.handle_error(RuntimeError("boom")) == "Oops."

    def test_classification(self):
        handler = ErrorHandler()
        handler.handle_error(ContentLoadError("topics.json missing"), {'service_name': 'content'})
        handler.handle_error(TurnProcessingError("no route"), {'session_id': 'abc'})
        handler.handle_error(ValueError("invalid index"))

        content_error, turn_error, value_error = handler.get_recent_errors()
        assert content_error.severity == ErrorSeverity.HIGH
        assert content_error.category == ErrorCategory.CONTENT
        assert content_error.service_name == 'content'
        assert turn_error.category == ErrorCategory.DIALOGUE
        assert turn_error.session_id == 'abc'
        assert value_error.category == ErrorCategory.VALIDATION
        assert value_error.to_dict()['severity'] == 'medium'

    def test_history_bounded_and_stats(self):
        handler = ErrorHandler(history_size=2)
        for _ in range(3):
            handler.handle_error(RuntimeError("boom"))

        stats = handler.get_stats()
        assert stats['total'] == 3
        assert stats['history_size'] == 2
        assert stats['by_category']['unknown'] == 3
