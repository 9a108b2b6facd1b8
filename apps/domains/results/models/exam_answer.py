from django.db import models
from apps.api.common.models import BaseModel


class ExamAnswer(BaseModel):
    """
    문항 단위 답안 + 채점 결과

    - (attempt, question) 당 1개, 제출 시 upsert
    - is_correct / points: 자동 채점 문항만 채움, 서술형·단답형은 null (수동 채점)
    """

    attempt = models.ForeignKey(
        "results.ExamAttempt",
        on_delete=models.CASCADE,
        related_name="answers",
    )
    question = models.ForeignKey(
        "exams.ExamQuestion",
        on_delete=models.CASCADE,
        related_name="answers",
    )

    answer = models.TextField(blank=True)

    is_correct = models.BooleanField(null=True)
    points = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        db_table = "results_exam_answer"
        constraints = [
            models.UniqueConstraint(
                fields=["attempt", "question"],
                name="unique_answer_per_attempt_question",
            )
        ]

    def __str__(self) -> str:
        return f"Attempt#{self.attempt_id} Q{self.question_id}"
