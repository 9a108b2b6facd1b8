from django.db import models
from apps.api.common.models import BaseModel
from .exam import Exam


class ExamQuestion(BaseModel):
    """
    시험 문항 정의

    correct_answer 는 multiple_choice / true_false 자동 채점용.
    short_answer / essay 는 수동 채점 대상.
    """

    class QuestionType(models.TextChoices):
        MULTIPLE_CHOICE = "multiple_choice", "객관식"
        TRUE_FALSE = "true_false", "OX"
        SHORT_ANSWER = "short_answer", "단답형"
        ESSAY = "essay", "서술형"

    exam = models.ForeignKey(
        Exam,
        on_delete=models.CASCADE,
        related_name="questions",
    )

    text = models.TextField()
    question_type = models.CharField(max_length=20, choices=QuestionType.choices)
    options = models.JSONField(default=list, blank=True)  # ["A", "B", ...]
    correct_answer = models.CharField(max_length=500, null=True, blank=True)

    points = models.PositiveIntegerField(default=1)
    order_index = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "exams_question"
        ordering = ["order_index", "id"]

    def __str__(self):
        return f"{self.exam} Q{self.order_index}"
