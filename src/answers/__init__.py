"""Answers: account nodes and the follows graph between them."""

from src.answers.models import Answer, FollowingAndOthers
from src.answers.repository import AnswerRepository
from src.answers.validation import VALIDATION_INFO, validate

__all__ = [
    "Answer",
    "AnswerRepository",
    "FollowingAndOthers",
    "VALIDATION_INFO",
    "validate",
]
