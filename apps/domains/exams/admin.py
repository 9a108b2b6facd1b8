from django.contrib import admin
from .models import Exam, ExamQuestion


class ExamQuestionInline(admin.TabularInline):
    model = ExamQuestion
    extra = 0
    fields = ("order_index", "question_type", "text", "options", "correct_answer", "points")


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "section", "start_time", "end_time", "duration_minutes")
    list_display_links = ("id", "title")
    list_filter = ("section__course",)
    search_fields = ("title",)
    ordering = ("-start_time",)
    inlines = [ExamQuestionInline]
