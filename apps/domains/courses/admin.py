# domains/courses/admin.py

from django.contrib import admin
from .models import Course, Section


# --------------------------------------------------
# Course
# --------------------------------------------------

@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("id", "code", "title", "is_active")
    list_display_links = ("id", "code")
    list_filter = ("is_active",)
    search_fields = ("code", "title")
    ordering = ("code",)


# --------------------------------------------------
# Section
# --------------------------------------------------

@admin.register(Section)
class SectionAdmin(admin.ModelAdmin):
    list_display = ("id", "course", "name", "instructor")
    list_display_links = ("id", "name")
    list_filter = ("course",)
    search_fields = ("name", "course__code", "course__title")
    ordering = ("course", "name")
