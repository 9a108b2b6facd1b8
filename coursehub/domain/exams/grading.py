"""
자동 채점 — 순수 함수 (DB 미사용)

- 시험에 없는 question_id 답안은 무시 (점수·저장 모두 제외)
- total_points: 매칭된 모든 문항 배점 합 (서술형 포함)
- 객관식/OX만 자동 채점: 앞뒤 공백 제거 + 대소문자 무시 비교
- total_points == 0 이면 score_percent = 0 (NaN 방지)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from coursehub.domain.exams.entities import Question, SubmittedAnswer


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()


@dataclass(frozen=True)
class GradedAnswer:
    question_id: int
    answer: str
    is_correct: Optional[bool]
    points: Optional[int]
    max_points: int


@dataclass(frozen=True)
class GradeReport:
    per_question: list[GradedAnswer]
    total_points: int
    earned_points: int
    score_percent: float


def grade_answer(question: Question, answer: str) -> GradedAnswer:
    if not question.question_type.is_auto_gradable:
        return GradedAnswer(
            question_id=question.id,
            answer=answer,
            is_correct=None,
            points=None,
            max_points=int(question.points),
        )

    cor = _norm(question.correct_answer)
    is_correct = cor != "" and _norm(answer) == cor
    return GradedAnswer(
        question_id=question.id,
        answer=answer,
        is_correct=is_correct,
        points=int(question.points) if is_correct else 0,
        max_points=int(question.points),
    )


def grade(questions: Iterable[Question], answers: Iterable[SubmittedAnswer]) -> GradeReport:
    by_id = {q.id: q for q in questions}

    # 같은 문항 중복 제출 시 마지막 답안만 채택 (upsert 결과와 일치)
    latest: dict[int, str] = {}
    for a in answers:
        if a.question_id not in by_id:
            continue
        latest.pop(a.question_id, None)
        latest[a.question_id] = a.answer

    per_question: list[GradedAnswer] = []
    total_points = 0
    earned_points = 0
    for qid, answer in latest.items():
        graded = grade_answer(by_id[qid], answer)
        total_points += graded.max_points
        earned_points += graded.points or 0
        per_question.append(graded)

    score_percent = (earned_points / total_points) * 100 if total_points > 0 else 0.0
    return GradeReport(
        per_question=per_question,
        total_points=total_points,
        earned_points=earned_points,
        score_percent=float(score_percent),
    )
