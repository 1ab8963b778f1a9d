"""
Activity Logger
===============

Bounded, append-only record of what the user did in a session.
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List


@dataclass
class ActivityLogEntry:
    timestamp: datetime
    user_input: str
    action: str


class ActivityLogger:
    """Keeps the most recent ``max_entries`` activities."""

    def __init__(self, max_entries: int = 100, clock: Callable[[], datetime] = datetime.now):
        self.entries: deque = deque(maxlen=max_entries)
        self.clock = clock

    def append(self, user_input: str, action: str):
        self.entries.append(ActivityLogEntry(timestamp=self.clock(), user_input=user_input, action=action))

    def render(self, user_name: str) -> str:
        """Format the log for display."""
        if not self.entries:
            return f"{user_name}, no activities logged yet."

        log = "Activity Log:\n"
        for entry in self.entries:
            log += f"{entry.timestamp:%Y-%m-%d %H:%M:%S}: {entry.user_input} - {entry.action}\n"
        return log

    def recent(self, count: int = 10) -> List[ActivityLogEntry]:
        return list(self.entries)[-count:]

    def clear(self):
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)
