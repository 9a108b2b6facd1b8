from django.contrib import admin
from .models import ExamAnswer, ExamAttempt

# 응시/답안은 API(ExamAttemptLifecycle, ExamSubmissionService)만 기록한다.
# admin 은 조회 전용: 제출 완료 응시를 되돌리거나 점수를 고치는 경로 없음.


class ExamAnswerInline(admin.TabularInline):
    model = ExamAnswer
    extra = 0
    fields = ("question", "answer", "is_correct", "points")
    readonly_fields = ("question", "answer", "is_correct", "points")

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ExamAttempt)
class ExamAttemptAdmin(admin.ModelAdmin):
    list_display = ("id", "exam", "student", "status", "score", "started_at", "submitted_at")
    list_display_links = ("id", "exam")
    list_filter = ("status", "exam")
    search_fields = ("student__username", "exam__title")
    ordering = ("-started_at",)
    readonly_fields = ("exam", "student", "started_at", "submitted_at", "status", "score", "time_remaining")
    inlines = [ExamAnswerInline]

    def has_add_permission(self, request):
        return False
