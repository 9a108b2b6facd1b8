# PATH: apps/domains/schedule/views/lesson_views.py
"""
Lesson 관리 (강사 / 관리자)

GET|POST              /sections/{section_id}/lessons/
GET|PUT|PATCH|DELETE  /lessons/{lesson_id}/
POST                  /lessons/{lesson_id}/schedules/

검증·권한(분반 담당 여부)·강의실 충돌은 모두 코어 LessonScheduler 가 판단.
여기서는 입력 형태만 확인한다.
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsInstructorOrAdmin, actor_from_user
from apps.domains.schedule.serializers import (
    LessonSerializer,
    LessonWriteSerializer,
    ScheduleCreateSerializer,
    ScheduleOccurrenceSerializer,
)
from apps.domains.schedule.services import lesson_scheduler


class SectionLessonListView(APIView):
    permission_classes = [IsAuthenticated, IsInstructorOrAdmin]

    def get(self, request, section_id: int):
        lessons = lesson_scheduler().list_section_lessons(actor_from_user(request.user), int(section_id))
        return Response(LessonSerializer(lessons, many=True).data)

    def post(self, request, section_id: int):
        serializer = LessonWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        lesson = lesson_scheduler().create_lesson(
            actor_from_user(request.user),
            int(section_id),
            title=data["title"],
            day_of_week=data["day_of_week"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            room_id=data.get("room_id"),
            description=data.get("description", ""),
        )
        return Response(LessonSerializer(lesson).data, status=status.HTTP_201_CREATED)


class LessonDetailView(APIView):
    permission_classes = [IsAuthenticated, IsInstructorOrAdmin]

    def get(self, request, lesson_id: int):
        lesson = lesson_scheduler().get_lesson(actor_from_user(request.user), int(lesson_id))
        return Response(LessonSerializer(lesson).data)

    def put(self, request, lesson_id: int):
        return self._update(request, lesson_id, partial=False)

    def patch(self, request, lesson_id: int):
        return self._update(request, lesson_id, partial=True)

    def delete(self, request, lesson_id: int):
        lesson_scheduler().delete_lesson(actor_from_user(request.user), int(lesson_id))
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, lesson_id, *, partial: bool):
        serializer = LessonWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        # partial 이면 요청에 포함된 키만 → room_id: null 은 강의실 해제
        changes = dict(serializer.validated_data)
        lesson = lesson_scheduler().update_lesson(actor_from_user(request.user), int(lesson_id), changes)
        return Response(LessonSerializer(lesson).data)


class LessonScheduleView(APIView):
    permission_classes = [IsAuthenticated, IsInstructorOrAdmin]

    def post(self, request, lesson_id: int):
        serializer = ScheduleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        occurrences = lesson_scheduler().materialize_schedule(
            actor_from_user(request.user),
            int(lesson_id),
            first_date=serializer.validated_data["first_date"],
            weeks=serializer.validated_data["weeks"],
        )
        return Response(
            ScheduleOccurrenceSerializer(occurrences, many=True).data,
            status=status.HTTP_201_CREATED,
        )
