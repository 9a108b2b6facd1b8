# PATH: apps/core/services/audit.py
from __future__ import annotations

from typing import Any, Optional

from apps.core.models import AuditLog
from coursehub.application.ports.audit import category_for_action, severity_for_action


def write_audit_log(
    *,
    action: str,
    actor_id: Optional[int],
    target_type: str,
    target_id: Any,
    details: Optional[dict[str, Any]] = None,
) -> AuditLog:
    """AuditLog 1건 insert. severity/category 는 action 기준 자동 결정."""
    return AuditLog.objects.create(
        user_id=actor_id,
        action=action,
        target_type=target_type or "",
        target_id="" if target_id is None else str(target_id),
        details=details or {},
        severity=severity_for_action(action),
        category=category_for_action(action),
    )
