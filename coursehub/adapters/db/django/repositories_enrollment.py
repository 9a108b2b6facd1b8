"""
Enrollment 조회 — .objects 접근을 adapters 내부로 한정.
"""
from __future__ import annotations


class DjangoEnrollmentRepository:

    def is_enrolled(self, student_id: int, section_id: int) -> bool:
        from apps.domains.enrollment.models import Enrollment
        return Enrollment.objects.filter(
            student_id=student_id,
            section_id=section_id,
            status=Enrollment.Status.ENROLLED,
        ).exists()

    def enrolled_section_ids(self, student_id: int) -> list[int]:
        from apps.domains.enrollment.models import Enrollment
        return list(
            Enrollment.objects.filter(
                student_id=student_id,
                status=Enrollment.Status.ENROLLED,
            )
            .values_list("section_id", flat=True)
            .distinct()
        )
