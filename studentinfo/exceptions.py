"""
StudentInfo API — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON envelopes with the matching HTTP status code.
Who:   Raised by services and route handlers; caught by global handlers.

Exception Hierarchy:
    StudentInfoError (base)   → 500 Internal Server Error
    ├── NotFoundError         → 404 Not Found
    └── DatabaseError         → 500 Internal Server Error

Request validation failures (bad path, query, or body) are raised by FastAPI
itself as RequestValidationError and keep the framework's 422 status.
"""

from typing import Any, Dict, Optional


class StudentInfoError(Exception):
    """
    Base exception for all StudentInfo application errors.

    Attributes:
        message:  Client-facing error description (returned in the envelope)
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(StudentInfoError):
    """
    Raised when a requested student row does not exist.

    HTTP:    404 Not Found

    The envelope `status` differs between endpoints: a plain lookup reports
    "fail", while edit and delete report "error". Callers pass the value
    they need through `status`.

    Example response:
        {"status": "fail", "message": "Student with ID: 7 not found"}
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        status: str = "fail",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status = status

    @classmethod
    def student(cls, student_id: int, status: str = "fail") -> "NotFoundError":
        """No row with this id exists when it is looked up."""
        return cls(
            message=f"Student with ID: {student_id} not found",
            status=status,
            context={"student_id": student_id},
        )

    @classmethod
    def affected_none(cls, student_id: int) -> "NotFoundError":
        """An update or delete for this id touched zero rows."""
        return cls(
            message=f"Note with ID: {student_id} not found",
            status="error",
            context={"student_id": student_id},
        )


class DatabaseError(StudentInfoError):
    """
    Raised when a database statement fails.

    What:    Connection lost, constraint violation, SQL error, and so on.
    HTTP:    500 Internal Server Error

    The message carries the driver's error detail so API consumers can see
    what went wrong; the original exception type is kept in `context`.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
