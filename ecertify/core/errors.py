"""Error Hierarchy: typed, categorized exceptions for every ledger rejection.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - One class per rejection kind; the facade never raises a generic failure
    - A raised LedgerError means nothing was mutated and no event was emitted
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with LedgerError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: actor and operation attached by the facade, not by components
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor: str | None = None
    operation: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


class LedgerError(Exception):
    """Base exception for all ledger rejections."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        context: ErrorContext | None = None,
        http_status: int = 400,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "actor": self.context.actor,
                    "operation": self.context.operation,
                    "details": self.context.details,
                },
            }
        }


def _context(details: dict[str, Any]) -> ErrorContext:
    return ErrorContext(details={k: v for k, v in details.items() if v is not None})


# ─── Input & Lifecycle ──────────────────────────────────────────

class InvalidInputError(LedgerError):
    """Empty required text or non-positive duration."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            context=_context({"field": field}), http_status=400,
        )
        self.field = field


class AlreadyRegisteredError(LedgerError):
    def __init__(self, actor: str):
        super().__init__(
            f"Actor '{actor}' already has a profile",
            "ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            context=_context({"target": actor}), http_status=409,
        )


class NotRegisteredError(LedgerError):
    def __init__(self, actor: str):
        super().__init__(
            f"Actor '{actor}' is not registered",
            "NOT_REGISTERED", ErrorCategory.RESOURCE_NOT_FOUND,
            context=_context({"target": actor}), http_status=404,
        )


class InvalidTargetError(LedgerError):
    """Link or transfer target is not a registered institute."""
    def __init__(self, target: str):
        super().__init__(
            f"'{target}' is not a registered institute",
            "INVALID_TARGET", ErrorCategory.VALIDATION,
            context=_context({"target": target}), http_status=400,
        )


class OnlyStudentError(LedgerError):
    def __init__(self, actor: str):
        super().__init__(
            "Only registered students can perform this action",
            "ONLY_STUDENT", ErrorCategory.AUTHORIZATION,
            context=_context({"target": actor}), http_status=403,
        )


# ─── Linkage ────────────────────────────────────────────────────

class AlreadyLinkedError(LedgerError):
    def __init__(self, student: str, institute: str):
        super().__init__(
            "Student is already linked to an institute",
            "ALREADY_LINKED", ErrorCategory.CONFLICT,
            context=_context({"student": student, "institute": institute}),
            http_status=409,
        )


class SameInstituteError(LedgerError):
    def __init__(self, institute: str):
        super().__init__(
            "Student is already linked to this institute",
            "SAME_INSTITUTE", ErrorCategory.BUSINESS_RULE,
            context=_context({"institute": institute}), http_status=409,
        )


class NoPendingRequestError(LedgerError):
    def __init__(self, student: str):
        super().__init__(
            "Student has no pending institute change request",
            "NO_PENDING_REQUEST", ErrorCategory.BUSINESS_RULE,
            context=_context({"student": student}), http_status=409,
        )


class UnauthorizedError(LedgerError):
    """Caller lacks the relationship the action requires."""
    def __init__(self, message: str, **details: Any):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            context=_context(details), http_status=403,
        )


# ─── Certificates & Grants ──────────────────────────────────────

class AlreadyVerifiedError(LedgerError):
    def __init__(self, student: str, index: int):
        super().__init__(
            f"Certificate #{index} is already verified",
            "ALREADY_VERIFIED", ErrorCategory.CONFLICT,
            context=_context({"student": student, "index": index}),
            http_status=409,
        )


class OutOfRangeError(LedgerError):
    def __init__(self, student: str, index: int, count: int):
        super().__init__(
            f"Certificate index {index} out of range ({count} on record)",
            "OUT_OF_RANGE", ErrorCategory.RESOURCE_NOT_FOUND,
            context=_context({"student": student, "index": index, "count": count}),
            http_status=404,
        )


class SelfGrantError(LedgerError):
    def __init__(self, actor: str):
        super().__init__(
            "Cannot grant access to yourself",
            "SELF_GRANT", ErrorCategory.BUSINESS_RULE,
            context=_context({"target": actor}), http_status=400,
        )


# ─── Shell ──────────────────────────────────────────────────────

class MissingIdentityError(LedgerError):
    """Caller identity header absent or malformed."""
    def __init__(self, header: str):
        super().__init__(
            f"Request must carry a valid actor address in '{header}'",
            "MISSING_IDENTITY", ErrorCategory.AUTHENTICATION,
            context=_context({"header": header}), http_status=401,
        )
