"""
Content Module
==============

Topics, quiz questions and general-knowledge entries for the assistant.
"""

from .data_loader import DataLoader, ContentStore, TopicData, QuizQuestion

__all__ = ['DataLoader', 'ContentStore', 'TopicData', 'QuizQuestion']
