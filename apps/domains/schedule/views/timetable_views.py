# PATH: apps/domains/schedule/views/timetable_views.py
"""
GET /me/timetable/

- 로그인 사용자 본인의 수강 확정(ENROLLED) 분반 Lesson
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.domains.schedule.serializers import LessonSerializer
from apps.domains.schedule.services import unit_of_work
from coursehub.application.use_cases.scheduling.timetable import student_timetable


class MyTimetableView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        lessons = student_timetable(unit_of_work(), int(request.user.pk))
        return Response(LessonSerializer(lessons, many=True).data)
