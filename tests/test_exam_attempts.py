from dataclasses import replace
from datetime import timedelta

import pytest

from coursehub.application.use_cases.exams.attempt_lifecycle import ExamAttemptLifecycle
from coursehub.application.use_cases.exams.submission import ExamSubmissionService
from coursehub.domain.exams.entities import (
    AttemptStatus,
    Exam,
    ExamAttempt,
    Question,
    QuestionType,
    SubmittedAnswer,
)
from coursehub.domain.shared.errors import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from tests.fakes import T0, FakeUnitOfWork, FixedClock, InMemoryExamAttemptRepository

STUDENT = 50
EXAM_ID = 7


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def uow():
    u = FakeUnitOfWork()
    u.add_section(1, instructor_id=10)
    u.add_exam(
        id=EXAM_ID,
        section_id=1,
        title="Midterm",
        start_time=T0,
        end_time=T0 + timedelta(hours=2),
        duration_minutes=60,
        questions=[
            Question(id=1, text="1", question_type=QuestionType.MULTIPLE_CHOICE, points=1, correct_answer="A"),
            Question(id=2, text="2", question_type=QuestionType.MULTIPLE_CHOICE, points=2, correct_answer="B"),
            Question(id=3, text="3", question_type=QuestionType.TRUE_FALSE, points=3, correct_answer="True"),
            Question(id=4, text="4", question_type=QuestionType.ESSAY, points=4),
        ],
    )
    u.enrollments.enroll(STUDENT, 1)
    return u


@pytest.fixture
def lifecycle(uow, clock):
    return ExamAttemptLifecycle(uow, clock)


@pytest.fixture
def submission(uow, clock):
    return ExamSubmissionService(uow, clock)


def answers(*pairs):
    return [SubmittedAnswer(question_id=q, answer=a) for q, a in pairs]


class TestStart:
    def test_start_creates_in_progress_attempt(self, lifecycle, clock):
        clock.advance(minutes=10)
        attempt = lifecycle.start(EXAM_ID, STUDENT)
        assert attempt.status is AttemptStatus.IN_PROGRESS
        assert attempt.started_at == T0 + timedelta(minutes=10)
        assert attempt.time_remaining == 3600
        assert attempt.submitted_at is None

    def test_missing_exam(self, lifecycle):
        with pytest.raises(NotFoundError, match="Exam not found"):
            lifecycle.start(999, STUDENT)

    @pytest.mark.parametrize("status", ["PENDING", "REJECTED", "DROPPED"])
    def test_not_enrolled(self, lifecycle, uow, status):
        uow.enrollments.enroll(STUDENT, 1, status=status)
        with pytest.raises(ForbiddenError, match="Not enrolled in this course"):
            lifecycle.start(EXAM_ID, STUDENT)

    def test_before_window(self, lifecycle, clock):
        clock.set(T0 - timedelta(seconds=1))
        with pytest.raises(InvalidStateError, match="exam not currently available"):
            lifecycle.start(EXAM_ID, STUDENT)

    def test_window_end_is_exclusive(self, lifecycle, clock):
        clock.set(T0 + timedelta(hours=2))
        with pytest.raises(InvalidStateError):
            lifecycle.start(EXAM_ID, STUDENT)

    def test_after_window(self, lifecycle, clock):
        clock.set(T0 + timedelta(hours=2, minutes=5))
        with pytest.raises(InvalidStateError, match="exam not currently available"):
            lifecycle.start(EXAM_ID, STUDENT)

    def test_start_twice_returns_existing_attempt(self, lifecycle, uow):
        first = lifecycle.start(EXAM_ID, STUDENT)
        with pytest.raises(ConflictError, match="Already attempted") as ei:
            lifecycle.start(EXAM_ID, STUDENT)
        assert ei.value.existing_attempt.id == first.id
        assert ei.value.to_payload()["existing_attempt"]["id"] == first.id
        assert len(uow.attempts.rows) == 1

    def test_lost_insert_race_is_conflict(self, uow, clock):
        class RacingAttempts(InMemoryExamAttemptRepository):
            """다른 요청이 조회와 insert 사이에 먼저 insert 한 상황."""

            def get_by_exam_and_student(self, exam_id, student_id):
                return None

        uow.attempts = RacingAttempts()
        ExamAttemptLifecycle(uow, clock).start(EXAM_ID, STUDENT)
        with pytest.raises(ConflictError) as ei:
            ExamAttemptLifecycle(uow, clock).start(EXAM_ID, STUDENT)
        assert ei.value.existing_attempt is not None
        assert len(uow.attempts.rows) == 1


class TestReadAttempt:
    def test_state_before_and_after_start(self, lifecycle):
        assert lifecycle.state(EXAM_ID, STUDENT) is AttemptStatus.NOT_STARTED
        lifecycle.start(EXAM_ID, STUDENT)
        assert lifecycle.state(EXAM_ID, STUDENT) is AttemptStatus.IN_PROGRESS

    def test_time_remaining_computed_on_read(self, lifecycle, clock):
        lifecycle.start(EXAM_ID, STUDENT)
        clock.advance(minutes=15, seconds=30)
        view = lifecycle.get(EXAM_ID, STUDENT)
        assert view.time_remaining == 3600 - 930
        assert view.is_expired is False
        # 저장된 값은 줄어들지 않는다
        assert view.attempt.time_remaining == 3600

    def test_expired_reported_without_state_change(self, lifecycle, clock):
        lifecycle.start(EXAM_ID, STUDENT)
        clock.advance(minutes=61)
        view = lifecycle.get(EXAM_ID, STUDENT)
        assert view.is_expired is True
        assert view.time_remaining == 0
        assert view.attempt.status is AttemptStatus.IN_PROGRESS
        assert view.to_dict()["is_expired"] is True

    def test_no_attempt(self, lifecycle):
        with pytest.raises(NotFoundError, match="No active attempt found"):
            lifecycle.get(EXAM_ID, STUDENT)


class TestSubmit:
    def test_scenario_start_then_submit_in_time(self, lifecycle, submission, clock, uow):
        clock.set(T0 + timedelta(minutes=10))
        lifecycle.start(EXAM_ID, STUDENT)
        clock.set(T0 + timedelta(minutes=65))

        result = submission.submit(
            EXAM_ID,
            STUDENT,
            answers((1, "A"), (2, "C"), (3, " true "), (4, "essay"), (99, "ignored")),
        )
        # 1 + 3 / (1 + 2 + 3 + 4)
        assert result.report.earned_points == 4
        assert result.report.total_points == 10
        assert result.score == pytest.approx(40.0)
        assert result.attempt.status is AttemptStatus.COMPLETED
        assert result.attempt.submitted_at == T0 + timedelta(minutes=65)
        assert result.attempt.time_remaining == 300

        saved = {a.question_id: a for a in uow.answers.list_for_attempt(result.attempt.id)}
        assert set(saved) == {1, 2, 3, 4}
        assert (saved[2].is_correct, saved[2].points) == (False, 0)
        assert (saved[4].is_correct, saved[4].points) == (None, None)

    def test_submit_at_exact_limit_ok(self, lifecycle, submission, clock):
        lifecycle.start(EXAM_ID, STUDENT)
        clock.advance(seconds=3600)
        result = submission.submit(EXAM_ID, STUDENT, answers((1, "A")))
        assert result.attempt.time_remaining == 0

    def test_submit_one_second_late_rejected(self, lifecycle, submission, clock, uow):
        lifecycle.start(EXAM_ID, STUDENT)
        clock.advance(seconds=3601)
        with pytest.raises(InvalidStateError, match="time limit exceeded"):
            submission.submit(EXAM_ID, STUDENT, answers((1, "A")))
        stored = uow.attempts.get_by_exam_and_student(EXAM_ID, STUDENT)
        assert stored.status is AttemptStatus.IN_PROGRESS
        assert uow.answers.rows == {}

    def test_sub_second_elapsed_is_floored(self, lifecycle, submission, clock):
        lifecycle.start(EXAM_ID, STUDENT)
        clock.advance(seconds=3600, milliseconds=900)
        submission.submit(EXAM_ID, STUDENT, answers((1, "A")))

    def test_second_submit_rejected_and_score_unchanged(self, lifecycle, submission, clock, uow):
        lifecycle.start(EXAM_ID, STUDENT)
        first = submission.submit(EXAM_ID, STUDENT, answers((1, "A")))
        with pytest.raises(InvalidStateError, match="already submitted"):
            submission.submit(EXAM_ID, STUDENT, answers((1, "X"), (2, "B")))
        stored = uow.attempts.get_by_exam_and_student(EXAM_ID, STUDENT)
        assert stored.score == first.score == 100.0
        assert stored.submitted_at == first.attempt.submitted_at

    def test_submit_without_attempt(self, submission):
        with pytest.raises(NotFoundError, match="No active attempt found"):
            submission.submit(EXAM_ID, STUDENT, answers((1, "A")))

    def test_submit_missing_exam(self, submission):
        with pytest.raises(NotFoundError, match="Exam not found"):
            submission.submit(999, STUDENT, [])

    def test_completed_attempt_keeps_snapshot_on_read(self, lifecycle, submission, clock):
        lifecycle.start(EXAM_ID, STUDENT)
        clock.advance(minutes=20)
        submission.submit(EXAM_ID, STUDENT, [])
        clock.advance(hours=5)
        view = lifecycle.get(EXAM_ID, STUDENT)
        assert view.time_remaining == 2400
        assert view.is_expired is False

    def test_essay_only_submission_scores_zero(self, lifecycle, submission):
        lifecycle.start(EXAM_ID, STUDENT)
        result = submission.submit(EXAM_ID, STUDENT, answers((4, "text")))
        assert result.score == 0.0


class TestAttemptEntity:
    def test_complete_is_terminal(self, clock):
        exam = Exam(id=1, section_id=1, title="t", start_time=T0, end_time=T0 + timedelta(hours=1), duration_minutes=30)
        attempt = replace(ExamAttempt.begin(exam, 5, T0), id=1)
        attempt.complete(T0 + timedelta(minutes=5), 50.0, exam.duration_seconds)
        with pytest.raises(InvalidStateError):
            attempt.complete(T0 + timedelta(minutes=6), 80.0, exam.duration_seconds)
        assert attempt.score == 50.0
