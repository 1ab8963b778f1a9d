"""
Task Manager
============

Per-session task list with an optional reminder for the most recently
added task.
"""

import re
import logging
from typing import Callable, List, Optional
from dataclasses import dataclass
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

REMINDER_FORMAT = "%Y-%m-%d %H:%M"
DATE_FORMATS = ["%Y-%m-%d %H:%M", "%Y-%m-%d", "%Y/%m/%d %H:%M", "%Y/%m/%d"]

TASK_PATTERNS = [
    re.compile(r'remind me to\s+(.*)', re.IGNORECASE),
    re.compile(r'(?:remind me|set (?:a )?reminder|reminder)\s+(?:to|for|about)\s+(.*)', re.IGNORECASE),
    re.compile(r'\btask\b\s*[-:]?\s*(.*)', re.IGNORECASE),
]


@dataclass
class TaskItem:
    title: str
    description: str
    reminder: Optional[datetime] = None
    is_completed: bool = False


@dataclass
class TaskCreationResult:
    success: bool
    message: str
    title: Optional[str] = None


@dataclass
class TaskOperationResult:
    success: bool
    message: str
    title: Optional[str] = None


@dataclass
class ReminderResponseResult:
    """
    Outcome of a reply to the reminder prompt.

    ``resolved`` is True when no further reply is expected, either because
    a reminder was set or the user declined one.
    """
    success: bool
    message: str
    reminder_date: Optional[datetime] = None
    resolved: bool = False


class TaskManager:
    """Create, list, delete and complete tasks."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.tasks: List[TaskItem] = []
        self.clock = clock
        self._pending_index: Optional[int] = None

    @property
    def awaiting_reminder(self) -> bool:
        return self._pending_index is not None

    def add(self, text: str) -> TaskCreationResult:
        """
        Add a task from free text.

        Accepts ``remind me to <description>`` and
        ``add task - <title>: <description>``.
        """
        raw = text.strip()
        remainder = None
        for pattern in TASK_PATTERNS:
            match = pattern.search(raw)
            if match:
                remainder = match.group(1).strip()
                break

        if not remainder:
            return TaskCreationResult(
                success=False,
                message="Please provide a task description. Example: 'remind me to update my password' "
                        "or 'add task - Update password: change my email password'."
            )

        if pattern is TASK_PATTERNS[0]:
            description = remainder
            title = description.split(":")[0].strip()
        elif ":" in remainder:
            title, _, rest = remainder.partition(":")
            title = title.strip()
            description = rest.strip() or title
        else:
            title = description = remainder

        if not title:
            title = description

        self.tasks.append(TaskItem(title=title, description=description))
        self._pending_index = len(self.tasks) - 1
        logger.debug(f"Task added, {len(self.tasks)} tasks in list")

        return TaskCreationResult(
            success=True,
            message=f"Task added with the description \"{description}\". Would you like a reminder? "
                    "(e.g., 'yes in 3 days', 'yes tomorrow', 'yes 2025-06-30 12:00', or 'no')",
            title=title
        )

    def handle_reminder_response(self, text: str, user_name: str) -> ReminderResponseResult:
        """Apply the user's reply to the reminder prompt."""
        if self._pending_index is None or self._pending_index >= len(self.tasks):
            self._pending_index = None
            return ReminderResponseResult(
                success=False,
                message="No task is awaiting a reminder response.",
                resolved=True
            )

        task = self.tasks[self._pending_index]
        lower = text.lower().strip()

        if lower == "no":
            self._pending_index = None
            return ReminderResponseResult(
                success=True,
                message=f"Got it! No reminder set for '{task.title}', {user_name}.",
                resolved=True
            )

        if lower.startswith("yes"):
            reminder_date = self.parse_timeframe(text.strip()[3:].strip())
            if reminder_date is None:
                return ReminderResponseResult(
                    success=False,
                    message=f"Invalid timeframe, {user_name}. Please use 'yes in X days', "
                            "'yes tomorrow', or 'yes 2025-06-30 12:00'."
                )

            task.reminder = reminder_date
            self._pending_index = None
            return ReminderResponseResult(
                success=True,
                message=f"Got it! I'll remind you on {reminder_date.strftime(REMINDER_FORMAT)} "
                        f"for '{task.title}', {user_name}.",
                reminder_date=reminder_date,
                resolved=True
            )

        return ReminderResponseResult(
            success=False,
            message=f"Please respond with 'yes in X days', 'yes tomorrow', 'yes 2025-06-30 12:00', "
                    f"or 'no', {user_name}."
        )

    def parse_timeframe(self, timeframe: str) -> Optional[datetime]:
        """Turn 'in 3 days', 'tomorrow' or an explicit date into a datetime."""
        for date_format in DATE_FORMATS:
            try:
                return datetime.strptime(timeframe, date_format)
            except ValueError:
                continue

        lower = timeframe.lower()
        if "in" in lower or "tomorrow" in lower:
            digits = "".join(c for c in lower if c.isdigit())
            # bare "tomorrow" and relative phrases without a day count mean one day
            days = int(digits) if digits and "day" in lower else 1
            try:
                return self.clock() + timedelta(days=days)
            except (OverflowError, ValueError):
                logger.debug("Reminder day count out of range")
                return None

        return None

    def list(self, user_name: str) -> str:
        if not self.tasks:
            return (f"{user_name}, you have no tasks yet. Add one with "
                    "'add task - [title]: [description]' or 'remind me to [task]'!")

        lines = "Your tasks:\n"
        for i, task in enumerate(self.tasks, start=1):
            reminder = (f"Reminder: {task.reminder.strftime(REMINDER_FORMAT)}"
                        if task.reminder else "No reminder")
            status = "[Completed]" if task.is_completed else "[Pending]"
            lines += f"{i}. {task.title} - {task.description} {status} ({reminder})\n"
            lines += f"   Options: delete task -{i} or complete task -{i}\n"
        return lines

    def _invalid_index(self, user_name: str) -> TaskOperationResult:
        return TaskOperationResult(
            success=False,
            message=f"{user_name}, invalid task index. Use 'view tasks' to see your task list and try again."
        )

    def delete(self, index: int, user_name: str) -> TaskOperationResult:
        """Delete a task by 1-based index."""
        if not 1 <= index <= len(self.tasks):
            return self._invalid_index(user_name)

        task = self.tasks.pop(index - 1)
        if self._pending_index is not None:
            if self._pending_index == index - 1:
                self._pending_index = None
            elif self._pending_index > index - 1:
                self._pending_index -= 1

        return TaskOperationResult(success=True, message=f"Task {index} deleted, {user_name}.", title=task.title)

    def complete(self, index: int, user_name: str) -> TaskOperationResult:
        """Mark a task completed by 1-based index."""
        if not 1 <= index <= len(self.tasks):
            return self._invalid_index(user_name)

        task = self.tasks[index - 1]
        task.is_completed = True
        return TaskOperationResult(success=True, message=f"Task {index} marked as completed, {user_name}.",
                                   title=task.title)

    @staticmethod
    def parse_task_index(text: str, prefix: str) -> Optional[int]:
        """Parse the index following a command prefix, e.g. 'delete task -2'."""
        lower = text.lower().strip()
        if not lower.startswith(prefix):
            return None

        index_part = lower[len(prefix):].strip().lstrip("-").strip()
        try:
            return int(index_part)
        except ValueError:
            return None

    def clear_pending(self):
        self._pending_index = None
