# backend/services/errors.py
# Domain errors raised by the service layer. main.py maps them to HTTP responses.


class DomainError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BusinessError(DomainError):
    """Request is well-formed but breaks a business rule."""
    status_code = 400


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Uniqueness clash (sku, receipt number, category code/name) or a blocked delete."""
    status_code = 409
