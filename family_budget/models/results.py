"""
Validation and Operation Result Models

The stores signal failures with typed exceptions. The session facade turns
those into OperationResult values so a UI can render a notification
without knowing the exception hierarchy.

DESIGN DECISION: A failed write after a successful mutation is NOT the same
as a rejected operation. OperationResult.out_of_sync flags the case where
memory and storage disagree, so the UI can warn that data may be lost on reload.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found in a draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'not_allowed')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class OperationResult(BaseModel):
    """
    Outcome of a store operation as seen by the presentation layer.

    success=True with out_of_sync=True never happens: a failed write
    always produces success=False.
    """

    success: bool
    operation: str = Field(
        ...,
        description="Name of the operation, e.g. 'add_transaction'"
    )
    data: Any = Field(
        default=None,
        description="Created/updated record, or None"
    )

    error_type: Optional[str] = Field(
        default=None,
        pattern="^(validation|not_found|persistence)$",
    )
    error_message: Optional[str] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    out_of_sync: bool = Field(
        default=False,
        description="In-memory state holds changes the storage does not"
    )

    @property
    def has_errors(self) -> bool:
        return not self.success

    @classmethod
    def ok(cls, operation: str, data: Any = None) -> 'OperationResult':
        return cls(success=True, operation=operation, data=data)

    @classmethod
    def failed(
        cls,
        operation: str,
        error_type: str,
        error_message: str,
        issues: Optional[list[ValidationIssue]] = None,
        out_of_sync: bool = False,
        data: Any = None,
    ) -> 'OperationResult':
        return cls(
            success=False,
            operation=operation,
            data=data,
            error_type=error_type,
            error_message=error_message,
            issues=issues or [],
            out_of_sync=out_of_sync,
        )
