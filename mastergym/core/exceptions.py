"""Domain exceptions raised by services and rendered by the API error handler.

Codes are stable strings clients can branch on: ``NF_<ENTITY>_001`` for
missing rows, ``VAL_<FIELD>_001`` for rejected input, ``BR_*`` for broken
business rules and ``CF_*`` for conflicts.
"""


class DomainError(Exception):
    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class NotFoundError(DomainError):
    def __init__(self, entity: str, message: str | None = None, details: dict | None = None):
        super().__init__(f"NF_{entity.upper()}_001", message or f"{entity} not found", details)


class ValidationError(DomainError):
    """Input that is well-formed but cannot be acted on."""

    def __init__(self, field: str, message: str, details: dict | None = None):
        super().__init__(
            f"VAL_{field.upper()}_001",
            f"Validation failed for {field}: {message}",
            details or {"field": field},
        )


class BusinessRuleError(DomainError):
    def __init__(self, message: str, code: str = "BR_001", details: dict | None = None):
        super().__init__(code, message, details)


class SessionClosedError(BusinessRuleError):
    """A completed or cancelled workout session was asked to change."""

    def __init__(self, session_id: int, status: str, action: str):
        super().__init__(
            f"Cannot {action} workout session {session_id}: it is already {status}",
            code="BR_SESSION_TERMINAL",
            details={"session_id": session_id, "status": status},
        )


class ConflictError(DomainError):
    def __init__(self, message: str, code: str = "CF_001", details: dict | None = None):
        super().__init__(code, message, details)
