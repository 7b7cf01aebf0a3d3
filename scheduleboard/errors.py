"""
Error taxonomy for schedule board operations.

Services raise these; the FastAPI handlers registered by
``register_exception_handlers`` turn them into HTTP responses:

- ValidationError    -> 400 with per-field detail
- NotFoundError      -> 404
- StorageUnavailable -> 503
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ScheduleBoardError(Exception):
    """Base class for schedule board errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(ScheduleBoardError):
    """A write payload is malformed or references missing data. Nothing was written."""

    status_code = 400

    def __init__(self, errors: list[dict], message: str = "Invalid data"):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(ScheduleBoardError):
    """Update/delete/get targeted an id that does not exist"""

    status_code = 404

    def __init__(self, resource: str, resource_id: Optional[int] = None):
        message = f"{resource} not found" if resource_id is None else f"{resource} {resource_id} not found"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class StorageUnavailable(ScheduleBoardError):
    """The backing store could not be reached. Callers may retry."""

    status_code = 503

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)


class DuplicateAssignmentError(ScheduleBoardError):
    """Insert collided with the (professional, weekday, start, end) unique key"""

    status_code = 409

    def __init__(self, professional_id: int, weekday: str, start_time: str, end_time: str):
        super().__init__(
            f"Assignment already exists for professional {professional_id} on {weekday} {start_time}-{end_time}"
        )
        self.key = (professional_id, weekday, start_time, end_time)


class DuplicateActivityCodeError(ScheduleBoardError):
    """Insert collided with the unique activity code"""

    status_code = 409

    def __init__(self, code: str):
        super().__init__(f"Activity code '{code}' already exists")
        self.code = code


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ScheduleBoardError)
    async def schedule_board_error_handler(request: Request, exc: ScheduleBoardError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} - {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
