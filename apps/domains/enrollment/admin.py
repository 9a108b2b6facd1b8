from django.contrib import admin
from .models import Enrollment


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("id", "student", "section", "status", "enrolled_at")
    list_display_links = ("id", "student")
    list_filter = ("status", "section__course")
    search_fields = ("student__username", "student__name", "section__course__code")
    ordering = ("-id",)
