"""Answer server client for codeask."""

from .base import AnswerClient
from .http import HttpAnswerClient
from .models import ModelConfig, QuestionRequest

__all__ = [
    "AnswerClient",
    "HttpAnswerClient",
    "ModelConfig",
    "QuestionRequest",
]
