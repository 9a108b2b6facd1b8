"""
AuditSink 어댑터 — core.AuditLog 기록 (fire-and-forget)

- COURSEHUB_AUDIT_ASYNC=True: commit 이후 Celery 태스크로 전달
- False: 같은 트랜잭션의 savepoint 안에서 즉시 insert
어느 쪽이든 기록 실패는 로그만 남기고 호출자에게 전파하지 않는다.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class DjangoAuditSink:

    def __init__(self, async_delivery: Optional[bool] = None) -> None:
        self._async = async_delivery

    def _use_async(self) -> bool:
        if self._async is not None:
            return self._async
        from django.conf import settings
        return bool(getattr(settings, "COURSEHUB_AUDIT_ASYNC", True))

    def record(
        self,
        action: str,
        actor_id: Optional[int],
        target_type: str,
        target_id: Any,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        payload = {
            "action": action,
            "actor_id": actor_id,
            "target_type": target_type,
            "target_id": None if target_id is None else str(target_id),
            "details": details or {},
        }
        if self._use_async():
            self._enqueue(payload)
        else:
            self._write(payload)

    def _enqueue(self, payload: dict[str, Any]) -> None:
        from django.db import transaction

        def _dispatch():
            from apps.core.tasks import record_audit_event_task
            try:
                record_audit_event_task.delay(**payload)
            except Exception:
                logger.warning(
                    "[audit] enqueue failed action=%s target=%s#%s",
                    payload["action"],
                    payload["target_type"],
                    payload["target_id"],
                    exc_info=True,
                )

        transaction.on_commit(_dispatch)

    def _write(self, payload: dict[str, Any]) -> None:
        from django.db import transaction
        from apps.core.services.audit import write_audit_log
        try:
            with transaction.atomic():
                write_audit_log(**payload)
        except Exception:
            logger.warning(
                "[audit] write failed action=%s target=%s#%s",
                payload["action"],
                payload["target_type"],
                payload["target_id"],
                exc_info=True,
            )
