#apps/core/permissions.py

from rest_framework.permissions import BasePermission

from coursehub.application.ports.identity import Actor, Role


def actor_from_user(user) -> Actor:
    """
    request.user → 코어 Actor.
    superuser 는 role 과 무관하게 ADMIN 취급.
    """
    if getattr(user, "is_superuser", False):
        return Actor(id=int(user.pk), role=Role.ADMIN)
    raw = str(getattr(user, "role", "") or "").upper()
    try:
        role = Role(raw)
    except ValueError:
        role = Role.STUDENT
    return Actor(id=int(user.pk), role=role)


class IsInstructorOrAdmin(BasePermission):
    """
    강사 / 관리자 전용 Permission
    - 분반 담당 여부는 코어(LessonScheduler)에서 확인
    """
    message = "Instructor or admin account required."

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        return actor_from_user(user).role in (Role.INSTRUCTOR, Role.ADMIN)


class IsStudent(BasePermission):
    """
    학생 전용 Permission
    - 로그인 필수
    - role == STUDENT
    """
    message = "Student account required."

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and actor_from_user(user).role == Role.STUDENT
        )
