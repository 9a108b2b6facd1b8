# domains/schedule/serializers.py

from rest_framework import serializers

from coursehub.domain.scheduling.entities import MAX_SCHEDULE_WEEKS


# ========================================================
# Input
# ========================================================

class LessonWriteSerializer(serializers.Serializer):
    """
    생성 / 전체 수정(PUT) 입력.
    시간 형식·요일·start < end 검증은 코어(TimeSlot)에서 수행.
    PATCH 는 partial=True 로 사용 → validated_data 에는 요청에 온 키만 남는다.
    """

    title = serializers.CharField(max_length=200, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    day_of_week = serializers.CharField(max_length=10)
    start_time = serializers.CharField(max_length=5)
    end_time = serializers.CharField(max_length=5)
    room_id = serializers.IntegerField(required=False, allow_null=True, default=None)


class ScheduleCreateSerializer(serializers.Serializer):
    first_date = serializers.DateField()
    weeks = serializers.IntegerField(min_value=1, max_value=MAX_SCHEDULE_WEEKS, default=16)


# ========================================================
# Output (코어 엔티티 → JSON)
# ========================================================

class RoomSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    location = serializers.CharField()
    capacity = serializers.IntegerField()


class LessonSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    section_id = serializers.IntegerField()
    title = serializers.CharField()
    description = serializers.CharField()
    day_of_week = serializers.SerializerMethodField()
    start_time = serializers.CharField()
    end_time = serializers.CharField()
    room_id = serializers.IntegerField(allow_null=True)
    room_name = serializers.CharField()
    course = serializers.SerializerMethodField()
    instructor = serializers.CharField(source="instructor_name")

    def get_day_of_week(self, obj):
        return obj.day_of_week.value

    def get_course(self, obj):
        return {"code": obj.course_code, "title": obj.course_title}


class ScheduleOccurrenceSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    lesson_id = serializers.IntegerField()
    date = serializers.DateField()
    is_cancelled = serializers.BooleanField()
