from datetime import timedelta

import pytest
from django.utils import timezone

from apps.domains.results.models import ExamAnswer, ExamAttempt

pytestmark = pytest.mark.django_db


def attempt_url(exam):
    return f"/api/v1/exams/{exam.id}/attempt/"


@pytest.fixture
def as_student(api_client, student):
    api_client.force_authenticate(user=student)
    return api_client


@pytest.fixture
def frozen_now(monkeypatch):
    """DjangoClock 을 고정 시각으로 대체. 반환 함수로 시각 이동."""
    state = {"now": timezone.now()}
    monkeypatch.setattr("coursehub.adapters.clock.DjangoClock.now", lambda self: state["now"])

    def _move(**delta):
        state["now"] = state["now"] + timedelta(**delta)
        return state["now"]

    return _move


def question_ids(exam):
    return list(exam.questions.order_by("order_index").values_list("id", flat=True))


class TestStartAttemptAPI:
    def test_start(self, as_student, exam, enrolled):
        res = as_student.post(attempt_url(exam))
        assert res.status_code == 201, res.content
        body = res.json()
        assert body["status"] == "IN_PROGRESS"
        assert body["time_remaining"] == 3600
        assert body["submitted_at"] is None

    def test_start_twice_is_409_with_existing(self, as_student, exam, enrolled):
        first = as_student.post(attempt_url(exam)).json()
        res = as_student.post(attempt_url(exam))
        assert res.status_code == 409
        assert res.json()["existing_attempt"]["id"] == first["id"]
        assert ExamAttempt.objects.count() == 1

    def test_not_enrolled_is_403(self, as_student, exam):
        res = as_student.post(attempt_url(exam))
        assert res.status_code == 403
        assert res.json()["detail"] == "Not enrolled in this course"

    def test_closed_exam_is_400(self, as_student, exam, enrolled):
        exam.end_time = timezone.now() - timedelta(minutes=1)
        exam.save()
        res = as_student.post(attempt_url(exam))
        assert res.status_code == 400
        assert res.json()["code"] == "invalid_state"

    def test_missing_exam_is_404(self, as_student):
        assert as_student.post("/api/v1/exams/9999/attempt/").status_code == 404

    def test_instructor_cannot_attempt(self, api_client, instructor, exam):
        api_client.force_authenticate(user=instructor)
        assert api_client.post(attempt_url(exam)).status_code == 403


class TestReadAttemptAPI:
    def test_get_without_attempt_is_404(self, as_student, exam, enrolled):
        res = as_student.get(attempt_url(exam))
        assert res.status_code == 404
        assert res.json()["detail"] == "No active attempt found"

    def test_time_remaining_on_read(self, as_student, exam, enrolled, frozen_now):
        as_student.post(attempt_url(exam))
        frozen_now(minutes=25)
        body = as_student.get(attempt_url(exam)).json()
        assert body["time_remaining"] == 3600 - 25 * 60
        assert body["is_expired"] is False
        assert body["duration_minutes"] == 60


class TestSubmitAttemptAPI:
    def test_submit_grades_and_completes(self, as_student, exam, enrolled, frozen_now):
        q1, q2, q3 = question_ids(exam)
        as_student.post(attempt_url(exam))
        frozen_now(minutes=30)

        res = as_student.patch(
            attempt_url(exam),
            {"answers": [
                {"question_id": q1, "answer": "4"},
                {"question_id": q2, "answer": " true "},
                {"question_id": q3, "answer": "because"},
                {"question_id": 99999, "answer": "x"},
            ]},
            format="json",
        )
        assert res.status_code == 200, res.content
        body = res.json()
        # (1 + 2) / (1 + 2 + 3)
        assert body["score"] == pytest.approx(50.0)
        assert body["attempt"]["status"] == "COMPLETED"
        assert body["attempt"]["time_remaining"] == 1800

        attempt = ExamAttempt.objects.get()
        assert attempt.is_completed
        assert attempt.submitted_at is not None
        assert ExamAnswer.objects.filter(attempt=attempt).count() == 3
        essay = ExamAnswer.objects.get(attempt=attempt, question_id=q3)
        assert essay.is_correct is None and essay.points is None

    def test_wrong_answer_stored_as_zero(self, as_student, exam, enrolled):
        q1 = question_ids(exam)[0]
        as_student.post(attempt_url(exam))
        as_student.patch(attempt_url(exam), {"answers": [{"question_id": q1, "answer": "3"}]}, format="json")
        stored = ExamAnswer.objects.get(question_id=q1)
        assert (stored.is_correct, stored.points) == (False, 0)

    def test_submit_at_limit_ok_and_one_second_late_rejected(self, api_client, make_user, section, exam, frozen_now):
        from apps.domains.enrollment.models import Enrollment

        on_time, late = make_user("s1"), make_user("s2")
        for u in (on_time, late):
            Enrollment.objects.create(student=u, section=section, status="ENROLLED")
            api_client.force_authenticate(user=u)
            api_client.post(attempt_url(exam))

        frozen_now(seconds=3600)
        api_client.force_authenticate(user=on_time)
        assert api_client.patch(attempt_url(exam), {"answers": []}, format="json").status_code == 200

        frozen_now(seconds=1)
        api_client.force_authenticate(user=late)
        res = api_client.patch(attempt_url(exam), {"answers": []}, format="json")
        assert res.status_code == 400
        assert res.json()["detail"] == "time limit exceeded"
        assert ExamAttempt.objects.get(student=late).status == "IN_PROGRESS"

    def test_second_submit_rejected(self, as_student, exam, enrolled):
        q1 = question_ids(exam)[0]
        as_student.post(attempt_url(exam))
        as_student.patch(attempt_url(exam), {"answers": [{"question_id": q1, "answer": "4"}]}, format="json")

        res = as_student.patch(attempt_url(exam), {"answers": [{"question_id": q1, "answer": "3"}]}, format="json")
        assert res.status_code == 400
        assert res.json()["detail"] == "already submitted"
        assert ExamAttempt.objects.get().score == 100.0
        assert ExamAnswer.objects.get(question_id=q1).answer == "4"

    def test_submit_without_attempt_is_404(self, as_student, exam, enrolled):
        res = as_student.patch(attempt_url(exam), {"answers": []}, format="json")
        assert res.status_code == 404

    def test_malformed_payload_is_400(self, as_student, exam, enrolled):
        as_student.post(attempt_url(exam))
        res = as_student.patch(attempt_url(exam), {"answers": [{"answer": "x"}]}, format="json")
        assert res.status_code == 400


class TestAttemptConstraints:
    def test_unique_per_exam_student(self, exam, student):
        from django.db import IntegrityError, transaction

        now = timezone.now()
        ExamAttempt.objects.create(exam=exam, student=student, started_at=now, time_remaining=3600)
        with pytest.raises(IntegrityError), transaction.atomic():
            ExamAttempt.objects.create(exam=exam, student=student, started_at=now, time_remaining=3600)

    def test_submitted_at_requires_completed(self, exam, student):
        from django.db import IntegrityError, transaction

        now = timezone.now()
        with pytest.raises(IntegrityError), transaction.atomic():
            ExamAttempt.objects.create(
                exam=exam, student=student, started_at=now, time_remaining=3600,
                status="IN_PROGRESS", submitted_at=now,
            )

    def test_adapter_converts_unique_violation(self, exam, student):
        from coursehub.adapters.db.django.uow import DjangoUnitOfWork
        from coursehub.domain.exams.entities import ExamAttempt as AttemptEntity
        from coursehub.domain.shared.errors import ConflictError

        now = timezone.now()
        existing = ExamAttempt.objects.create(exam=exam, student=student, started_at=now, time_remaining=3600)
        with DjangoUnitOfWork() as uow:
            with pytest.raises(ConflictError) as ei:
                uow.attempts.create(
                    AttemptEntity(id=None, exam_id=exam.id, student_id=student.id, started_at=now, time_remaining=3600)
                )
            # savepoint 덕분에 같은 트랜잭션에서 계속 조회 가능
            assert uow.attempts.get_by_exam_and_student(exam.id, student.id).id == existing.id
        assert ei.value.existing_attempt.id == existing.id

    def test_answer_upsert_keeps_one_row_per_question(self, exam, student):
        from coursehub.adapters.db.django.uow import DjangoUnitOfWork
        from coursehub.domain.exams.entities import ExamAnswer as AnswerEntity

        attempt = ExamAttempt.objects.create(
            exam=exam, student=student, started_at=timezone.now(), time_remaining=3600
        )
        q1 = question_ids(exam)[0]

        with DjangoUnitOfWork() as uow:
            first = uow.answers.upsert(
                AnswerEntity(attempt_id=attempt.id, question_id=q1, answer="3", is_correct=False, points=0)
            )
            second = uow.answers.upsert(
                AnswerEntity(attempt_id=attempt.id, question_id=q1, answer="4", is_correct=True, points=1)
            )

        assert first.id == second.id
        stored = ExamAnswer.objects.get(attempt=attempt, question_id=q1)
        assert (stored.answer, stored.is_correct, stored.points) == ("4", True, 1)

    def test_unique_answer_per_attempt_question(self, exam, student):
        from django.db import IntegrityError, transaction

        attempt = ExamAttempt.objects.create(
            exam=exam, student=student, started_at=timezone.now(), time_remaining=3600
        )
        q1 = question_ids(exam)[0]
        ExamAnswer.objects.create(attempt=attempt, question_id=q1, answer="3")
        with pytest.raises(IntegrityError), transaction.atomic():
            ExamAnswer.objects.create(attempt=attempt, question_id=q1, answer="4")

    def test_unit_of_work_rolls_back_on_error(self, exam, student):
        from coursehub.adapters.db.django.uow import DjangoUnitOfWork
        from coursehub.domain.exams.entities import ExamAttempt as AttemptEntity
        from coursehub.domain.shared.errors import InvalidStateError

        with pytest.raises(InvalidStateError):
            with DjangoUnitOfWork() as uow:
                uow.attempts.create(
                    AttemptEntity(
                        id=None, exam_id=exam.id, student_id=student.id,
                        started_at=timezone.now(), time_remaining=3600,
                    )
                )
                raise InvalidStateError("abort")
        assert not ExamAttempt.objects.exists()


class TestExamConstraints:
    def test_window_must_be_non_empty(self, section):
        from django.db import IntegrityError, transaction
        from apps.domains.exams.models import Exam

        now = timezone.now()
        with pytest.raises(IntegrityError), transaction.atomic():
            Exam.objects.create(section=section, title="X", start_time=now, end_time=now, duration_minutes=30)

    def test_zero_duration_rejected(self, section):
        from django.core.exceptions import ValidationError as DjangoValidationError
        from django.db import IntegrityError, transaction
        from apps.domains.exams.models import Exam

        now = timezone.now()
        exam = Exam(section=section, title="X", start_time=now, end_time=now + timedelta(hours=1), duration_minutes=0)
        with pytest.raises(DjangoValidationError) as ei:
            exam.full_clean()
        assert "duration_minutes" in ei.value.message_dict

        with pytest.raises(IntegrityError), transaction.atomic():
            exam.save()
