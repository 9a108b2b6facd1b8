from django.conf import settings
from django.db import models

from apps.api.common.models import TimestampModel
from apps.domains.courses.models import Section


# ========================================================
# Enrollment (분반 단위 수강 등록)
# ========================================================

class Enrollment(TimestampModel):
    """
    학생이 특정 분반을 수강하는 행위.
    시험 응시 / 시간표는 status == ENROLLED 만 인정.
    """

    class Status(models.TextChoices):
        PENDING = "PENDING", "대기"
        ENROLLED = "ENROLLED", "수강"
        REJECTED = "REJECTED", "거절"
        DROPPED = "DROPPED", "수강취소"

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    section = models.ForeignKey(
        Section,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["student", "section"],
                name="unique_enrollment_per_section",
            )
        ]

    def __str__(self):
        return f"{self.student} -> {self.section}"
