# apps/domains/results/views/exam_attempt_view.py
"""
학생 본인 시험 응시

GET   /exams/{exam_id}/attempt/   응시 조회 (남은 시간은 조회 시점 계산)
POST  /exams/{exam_id}/attempt/   응시 시작
PATCH /exams/{exam_id}/attempt/   답안 제출 (1회, 제한 시간 내)

수강 여부 / 개방 구간 / 중복 응시 / 제한 시간 판단은 코어 Use Case 책임.
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsStudent
from apps.domains.results.serializers.exam_attempt import (
    ExamAnswerSerializer,
    ExamSubmitSerializer,
)
from apps.domains.results.services import attempt_lifecycle, submission_service
from coursehub.domain.exams.entities import SubmittedAnswer


class MyExamAttemptView(APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request, exam_id: int):
        view = attempt_lifecycle().get(int(exam_id), int(request.user.pk))
        return Response(view.to_dict())

    def post(self, request, exam_id: int):
        attempt = attempt_lifecycle().start(int(exam_id), int(request.user.pk))
        return Response(attempt.to_dict(), status=status.HTTP_201_CREATED)

    def patch(self, request, exam_id: int):
        serializer = ExamSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        answers = [
            SubmittedAnswer.from_dict(a)
            for a in serializer.validated_data["answers"]
        ]
        result = submission_service().submit(int(exam_id), int(request.user.pk), answers)

        return Response({
            "attempt": result.attempt.to_dict(),
            "score": result.score,
            "earned_points": result.report.earned_points,
            "total_points": result.report.total_points,
            "answers": ExamAnswerSerializer(result.answers, many=True).data,
        })
