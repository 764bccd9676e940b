"""Audit logging package."""

from family_budget.audit.logger import AuditLogger, get_audit_logger

__all__ = ["AuditLogger", "get_audit_logger"]
