# apps/domains/results/serializers/exam_attempt.py

from rest_framework import serializers


class SubmittedAnswerSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    answer = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ExamSubmitSerializer(serializers.Serializer):
    """
    PATCH 입력: {"answers": [{"question_id": 1, "answer": "B"}, ...]}
    시험에 없는 question_id 는 채점/저장에서 무시 (코어 규칙).
    """
    answers = SubmittedAnswerSerializer(many=True)


class ExamAnswerSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    answer = serializers.CharField()
    is_correct = serializers.BooleanField(allow_null=True)
    points = serializers.IntegerField(allow_null=True)
