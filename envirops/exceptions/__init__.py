"""Custom exceptions for the envirops application."""


class EnviropsError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['error'] = self.message
        rv['status'] = 'error'
        return rv


class BusinessLogicError(EnviropsError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)


class ValidationError(BusinessLogicError):
    """Raised when a submitted payload fails schema validation."""
    def __init__(self, errors, message="Datos inválidos"):
        self.errors = errors
        super().__init__(message, status_code=400, payload={'errors': errors})


class NotFoundError(EnviropsError):
    """Exception raised when a resource is not found (or is soft-deleted)."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


class ConflictError(BusinessLogicError):
    """Raised when a write collides with existing state (duplicate number, bad status)."""
    def __init__(self, message, payload=None):
        super().__init__(message, status_code=409, payload=payload)


class TransactionError(EnviropsError):
    """Raised when the database rejects a write; the transaction was rolled back."""
    def __init__(self, message="Error al guardar los cambios", payload=None):
        super().__init__(message, 500, payload)


class NetworkError(EnviropsError):
    """Raised by API-client stores when a request fails or the API answers with an error."""
    def __init__(self, message="Error de comunicación con el servidor", status_code=None, payload=None):
        super().__init__(message, status_code or 503, payload)
        self.response_status = status_code
