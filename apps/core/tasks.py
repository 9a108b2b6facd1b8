# apps/core/tasks.py
from celery import shared_task

from apps.core.services.audit import write_audit_log


@shared_task(bind=True, autoretry_for=(Exception,), retry_kwargs={"max_retries": 3})
def record_audit_event_task(
    self,
    action: str,
    actor_id,
    target_type: str,
    target_id,
    details: dict,
) -> bool:
    write_audit_log(
        action=action,
        actor_id=actor_id,
        target_type=target_type,
        target_id=target_id,
        details=details,
    )
    return True
