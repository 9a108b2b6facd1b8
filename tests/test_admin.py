import pytest
from django.contrib import admin
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.domains.results.models import ExamAttempt
from apps.domains.schedule.models import Lesson

pytestmark = pytest.mark.django_db

LESSON_ADD_URL = "/admin/schedule/lesson/add/"


@pytest.fixture
def superuser(django_user_model):
    return django_user_model.objects.create_superuser(
        username="root", email="root@example.com", password="pw-12345"
    )


@pytest.fixture
def staff_client(client, superuser):
    client.force_login(superuser)
    return client


def lesson_form(section, room=None, **kw):
    data = {
        "section": section.id,
        "title": "Lecture",
        "description": "",
        "day_of_week": "MONDAY",
        "start_time": "09:00",
        "end_time": "10:30",
        "room": room.id if room else "",
    }
    data.update(kw)
    return data


class TestLessonAdmin:
    def test_overlapping_room_booking_rejected(self, staff_client, section, room):
        res = staff_client.post(LESSON_ADD_URL, lesson_form(section, room, title="A"))
        assert res.status_code == 302

        res = staff_client.post(
            LESSON_ADD_URL,
            lesson_form(section, room, title="B", start_time="10:00", end_time="11:00"),
        )
        assert res.status_code == 200
        assert "Room is already booked for this time slot" in res.content.decode()
        assert list(Lesson.objects.values_list("title", flat=True)) == ["A"]

    def test_adjacent_booking_allowed(self, staff_client, section, room):
        staff_client.post(LESSON_ADD_URL, lesson_form(section, room, title="A"))
        res = staff_client.post(
            LESSON_ADD_URL,
            lesson_form(section, room, title="B", start_time="10:30", end_time="11:30"),
        )
        assert res.status_code == 302
        assert Lesson.objects.count() == 2

    def test_reversed_times_rejected(self, staff_client, section, room):
        res = staff_client.post(
            LESSON_ADD_URL,
            lesson_form(section, room, title="C", start_time="9:45", end_time="9:15"),
        )
        assert res.status_code == 200
        assert not Lesson.objects.exists()

    def test_unpadded_time_stored_normalised(self, staff_client, section):
        res = staff_client.post(LESSON_ADD_URL, lesson_form(section, start_time="9:00", end_time="9:45"))
        assert res.status_code == 302
        assert Lesson.objects.values_list("start_time", "end_time").get() == ("09:00", "09:45")

    def test_edit_does_not_conflict_with_itself(self, staff_client, section, room):
        staff_client.post(LESSON_ADD_URL, lesson_form(section, room, title="A"))
        lesson = Lesson.objects.get()

        res = staff_client.post(
            f"/admin/schedule/lesson/{lesson.id}/change/",
            lesson_form(section, room, title="A2", end_time="10:00"),
        )
        assert res.status_code == 302
        lesson.refresh_from_db()
        assert (lesson.title, lesson.end_time) == ("A2", "10:00")

    def test_db_rejects_start_after_end(self, section):
        with pytest.raises(IntegrityError), transaction.atomic():
            Lesson.objects.create(
                section=section, title="X", day_of_week="MONDAY", start_time="10:00", end_time="09:00"
            )


class TestExamAttemptAdmin:
    @pytest.fixture
    def completed(self, exam, student):
        now = timezone.now()
        return ExamAttempt.objects.create(
            exam=exam,
            student=student,
            started_at=now,
            submitted_at=now,
            status="COMPLETED",
            score=80.0,
            time_remaining=120,
        )

    def test_form_has_no_editable_fields(self, rf, superuser, completed):
        request = rf.get("/")
        request.user = superuser
        model_admin = admin.site._registry[ExamAttempt]

        form_cls = model_admin.get_form(request, completed)
        assert not form_cls.base_fields
        assert model_admin.has_add_permission(request) is False

    def test_change_post_cannot_reopen(self, staff_client, completed):
        res = staff_client.post(
            f"/admin/results/examattempt/{completed.id}/change/",
            {
                "status": "IN_PROGRESS",
                "submitted_at_0": "",
                "submitted_at_1": "",
                "score": "0",
                "answers-TOTAL_FORMS": "0",
                "answers-INITIAL_FORMS": "0",
                "answers-MIN_NUM_FORMS": "0",
                "answers-MAX_NUM_FORMS": "0",
            },
        )
        assert res.status_code == 302
        completed.refresh_from_db()
        assert completed.status == "COMPLETED"
        assert completed.score == 80.0
        assert completed.submitted_at is not None
