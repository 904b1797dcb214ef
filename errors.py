"""Typed payment errors, translated into HTTP responses by main.py."""


class PaymentError(Exception):
    """Base exception for every payment failure."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class NotFound(PaymentError):
    """A card or business lookup produced no match."""

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found", "NOT_FOUND", 404)
        self.entity = entity


class Unauthorized(PaymentError):
    """The payment is not permitted; `reason` says which check refused it."""

    def __init__(self, reason: str):
        super().__init__(reason, "UNAUTHORIZED", 401)
        self.reason = reason


class Conflict(PaymentError):
    """The record clashes with one that already exists."""

    def __init__(self, message: str):
        super().__init__(message, "CONFLICT", 409)
