# screentime_api/common/errors.py
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from .http import fail


class APIError(Exception):
    """Base error carrying an HTTP status and a machine-readable code."""
    def __init__(self, code, message, status_code=400, payload=None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.payload = payload


class NotFoundError(APIError):
    def __init__(self, message, payload=None):
        super().__init__("NOT_FOUND", message, status_code=404, payload=payload)


class IntegrityViolation(APIError):
    """A delete refused because other rows still reference the record."""
    def __init__(self, message, payload=None):
        super().__init__("ADJUSTMENT_TYPE_IN_USE", message, status_code=409, payload=payload)


class ValidationError(APIError):
    def __init__(self, message, payload=None):
        super().__init__("VALIDATION_ERROR", message, status_code=422, payload=payload)


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def _api_error(e: APIError):
        return fail(message=e.message, status=e.status_code, code=e.code, detail=e.payload)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(IntegrityError)
    def _integrity(e: IntegrityError):
        # 409 for unique/FK violations
        app.logger.warning("integrity error: %s", getattr(e, "orig", e))
        return fail("Conflict / integrity error", status=409, code="CONSTRAINT_ERROR")

    @app.errorhandler(Exception)
    def _500(e: Exception):
        app.logger.exception(e)
        return fail("Internal server error", status=500)
