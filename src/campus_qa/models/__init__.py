# src/campus_qa/models/__init__.py
"""SQLAlchemy models for the Campus Q&A application."""

from .answer import Answer
from .faq import AiFaq
from .profile import Profile
from .question import Question, Tag, question_tag
from .system import GlobalSettings
from .vote import Vote

__all__ = [
    "AiFaq",
    "Answer",
    "GlobalSettings",
    "Profile",
    "Question", "Tag", "question_tag",
    "Vote",
]
