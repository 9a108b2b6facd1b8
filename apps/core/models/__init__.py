from .user import User
from .audit_log import AuditLog

__all__ = [
    "User",
    "AuditLog",
]
