from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    from apps.core.models import User

    def _make(username, role=User.Role.STUDENT, **kwargs):
        return User.objects.create_user(username=username, password="pw-12345", role=role, **kwargs)

    return _make


@pytest.fixture
def instructor(make_user):
    return make_user("inst", role="INSTRUCTOR", name="Kim Instructor")


@pytest.fixture
def other_instructor(make_user):
    return make_user("inst2", role="INSTRUCTOR")


@pytest.fixture
def admin_user(make_user):
    return make_user("admin", role="ADMIN")


@pytest.fixture
def student(make_user):
    return make_user("stu", role="STUDENT")


@pytest.fixture
def section(db, instructor):
    from apps.domains.courses.models import Course, Section

    course = Course.objects.create(code="CS101", title="Intro to CS")
    return Section.objects.create(course=course, name="A", instructor=instructor)


@pytest.fixture
def room(db):
    from apps.domains.schedule.models import Room

    return Room.objects.create(name="R101", location="Main Hall", capacity=40)


@pytest.fixture
def enrolled(db, student, section):
    from apps.domains.enrollment.models import Enrollment

    return Enrollment.objects.create(student=student, section=section, status=Enrollment.Status.ENROLLED)


@pytest.fixture
def exam(db, section):
    from apps.domains.exams.models import Exam, ExamQuestion

    now = timezone.now()
    exam = Exam.objects.create(
        section=section,
        title="Midterm",
        start_time=now - timedelta(minutes=10),
        end_time=now + timedelta(hours=2),
        duration_minutes=60,
    )
    ExamQuestion.objects.create(exam=exam, text="2+2?", question_type="multiple_choice",
                                options=["3", "4"], correct_answer="4", points=1, order_index=1)
    ExamQuestion.objects.create(exam=exam, text="Sky is blue", question_type="true_false",
                                correct_answer="True", points=2, order_index=2)
    ExamQuestion.objects.create(exam=exam, text="Explain", question_type="essay", points=3, order_index=3)
    return exam
