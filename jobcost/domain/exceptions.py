"""
Domain Exceptions for the job cost ledger.

The rollup engine itself never raises for dirty data (missing cost codes,
null categories); these exceptions cover caller mistakes and the
service/API boundary.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# =============================================================================
# Lookup Exceptions
# =============================================================================

class ProjectNotFoundError(DomainError):
    """Raised when a project cannot be found."""

    def __init__(self, project_id: str):
        message = f"Project with id '{project_id}' not found"
        super().__init__(message, code="PROJECT_NOT_FOUND")
        self.project_id = project_id


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidScopeError(DomainError):
    """Raised when a rollup scope is inconsistent (e.g. inverted date range)."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid rollup scope: {reason}", code="INVALID_SCOPE")
        self.reason = reason


class ValidationError(DomainError):
    """Raised when data validation fails."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Validation failed for '{field}': {message}", code="VALIDATION_ERROR")
        self.field = field


# =============================================================================
# Cost Code Exceptions
# =============================================================================

class DuplicateCostCodeError(DomainError):
    """Raised when creating a cost code whose code already exists."""

    def __init__(self, code: str):
        super().__init__(f"Cost code '{code}' already exists", code="DUPLICATE_COST_CODE")
        self.cost_code = code


# =============================================================================
# Aggregation Exceptions
# =============================================================================

class InvariantViolationError(DomainError):
    """Raised when a mathematical invariant is violated."""

    def __init__(self, invariant_name: str, expected: str, actual: str):
        message = (
            f"Invariant '{invariant_name}' violated. "
            f"Expected: {expected}, Actual: {actual}"
        )
        super().__init__(message, code="INVARIANT_VIOLATION")
        self.invariant_name = invariant_name
        self.expected = expected
        self.actual = actual
