"""
Domain exceptions for the property request lifecycle.

Every business failure raised by the services layer derives from
LifecycleError and carries a stable ``kind`` plus the HTTP status the API
layer reports it with. They are scoped to a single operation: the
coordinator rolls back before they reach the caller.
"""


class LifecycleError(Exception):
    """Base exception for all lifecycle business errors"""
    kind = "LifecycleError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LifecycleError):
    """Raised when a referenced property, request or user does not exist"""
    kind = "NotFound"
    status_code = 404


class InvalidQuantity(LifecycleError):
    """Raised when a requested, approved or registered quantity is out of range"""
    kind = "InvalidQuantity"
    status_code = 422


class InvalidTransition(LifecycleError):
    """Raised when a request is not in the state the operation requires"""
    kind = "InvalidTransition"
    status_code = 409


class InsufficientStock(LifecycleError):
    """Raised when a reservation exceeds the available quantity"""
    kind = "InsufficientStock"
    status_code = 409


class AlreadyIssued(InvalidTransition):
    """Raised when issuing a request that already has an issuance record"""
    kind = "AlreadyIssued"
    status_code = 409


class DuplicateNumber(LifecycleError):
    """Raised when a property number is already used by another property"""
    kind = "DuplicateNumber"
    status_code = 409


class Unauthorized(LifecycleError):
    """Raised when the actor's role does not permit the operation"""
    kind = "Unauthorized"
    status_code = 403


class PersistenceError(Exception):
    """
    Transport-level database failure (connectivity, lock timeout).

    Nothing was committed when this is raised, so the caller may retry.
    """
    kind = "PersistenceError"
    status_code = 503

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
