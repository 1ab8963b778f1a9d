"""
Session Managers
================

Quiz, task and activity-log collaborators owned by each dialogue session.
"""

from .quiz_manager import QuizManager, QuizAnswerResult
from .task_manager import (
    TaskManager, TaskItem, TaskCreationResult, TaskOperationResult, ReminderResponseResult
)
from .activity_logger import ActivityLogger, ActivityLogEntry

__all__ = [
    'QuizManager', 'QuizAnswerResult',
    'TaskManager', 'TaskItem', 'TaskCreationResult', 'TaskOperationResult', 'ReminderResponseResult',
    'ActivityLogger', 'ActivityLogEntry'
]
