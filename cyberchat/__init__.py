"""
CyberChat
=========

Rule-based cybersecurity awareness assistant: topic answers, a quiz,
a task list with reminders and an activity log.
"""

__version__ = "1.0.0"
