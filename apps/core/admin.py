# PATH: apps/core/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from apps.core.models import AuditLog, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("id", "username", "name", "role", "is_active", "is_staff")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("username", "name", "email")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Course Hub", {"fields": ("name", "phone", "role")}),
    )


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("id", "created_at", "severity", "category", "action", "target_type", "target_id", "user")
    list_filter = ("severity", "category", "action")
    search_fields = ("action", "target_id")
    ordering = ("-created_at",)
    readonly_fields = ("user", "action", "target_type", "target_id", "details", "severity", "category", "created_at")
