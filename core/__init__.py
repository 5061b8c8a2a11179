# Latin - Core Module
"""
Infrastructure for the Latin command line: settings and the audit log.
The latin library package does not depend on anything here.
"""

from .config import Settings
from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus

__all__ = [
    "Settings",
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
]
