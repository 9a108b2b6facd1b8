# PATH: apps/domains/results/views/__init__.py

from .exam_attempt_view import MyExamAttemptView

__all__ = [
    "MyExamAttemptView",
]
