from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q

from apps.api.common.models import BaseModel
from apps.domains.courses.models import Section


class Exam(BaseModel):
    """
    시간 제한 시험 정의

    - start_time <= now < end_time 구간에서만 응시 시작 가능
    - duration_minutes: 응시 시작 시점부터의 제한 시간 (1분 이상)
    """

    section = models.ForeignKey(
        Section,
        on_delete=models.CASCADE,
        related_name="exams",
    )

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = "exams_exam"
        ordering = ["-start_time"]
        constraints = [
            models.CheckConstraint(
                condition=Q(start_time__lt=F("end_time")),
                name="exam_start_before_end",
            ),
            models.CheckConstraint(
                condition=Q(duration_minutes__gte=1),
                name="exam_duration_positive",
            ),
        ]

    def __str__(self):
        return self.title
