# apps/domains/results/models/exam_attempt.py
from django.conf import settings
from django.db import models
from django.db.models import Q

from apps.api.common.models import BaseModel


class ExamAttempt(BaseModel):
    """
    학생의 '시험 1회 응시' (시험·학생당 정확히 1개)

    ✅ 설계 고정 사항
    --------------------------------------------------
    1) (exam, student) 유니크 제약 → 동시 시작 요청도 1 row 만 생성
    2) status 는 명시 저장 (NOT_STARTED / IN_PROGRESS / COMPLETED)
       - COMPLETED 는 최종 상태, 되돌리지 않는다.
    3) submitted_at 은 COMPLETED 일 때만 존재 (check constraint)
    4) time_remaining 은 제출 시점 스냅샷(초). 진행 중에는 조회 시 계산.
    """

    class Status(models.TextChoices):
        NOT_STARTED = "NOT_STARTED", "Not started"
        IN_PROGRESS = "IN_PROGRESS", "In progress"
        COMPLETED = "COMPLETED", "Completed"

    exam = models.ForeignKey(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="attempts",
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="exam_attempts",
    )

    started_at = models.DateTimeField()
    submitted_at = models.DateTimeField(null=True, blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.IN_PROGRESS,
    )

    score = models.FloatField(null=True, blank=True)
    time_remaining = models.PositiveIntegerField(help_text="초 단위")

    class Meta:
        db_table = "results_exam_attempt"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["exam", "student"],
                name="unique_attempt_per_exam_student",
            ),
            models.CheckConstraint(
                condition=(
                    Q(status="COMPLETED", submitted_at__isnull=False)
                    | (~Q(status="COMPLETED") & Q(submitted_at__isnull=True))
                ),
                name="attempt_submitted_iff_completed",
            ),
        ]

    @property
    def is_completed(self) -> bool:
        return self.status == self.Status.COMPLETED

    def __str__(self):
        return f"ExamAttempt exam={self.exam_id} student={self.student_id} ({self.status})"
