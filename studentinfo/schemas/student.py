"""
StudentInfo API — Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the API contract.
How:   FastAPI validates request bodies against these models, serializes the
       response envelopes, and generates the OpenAPI document from them.

Every endpoint has its own envelope type. Field names and casing are part of
the public contract (`status`, `count`, `notes`, `data`, `note`, `message`),
and the `class` field is exposed under its JSON name through an alias.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from studentinfo.config import settings

# Bounds of the `integer` columns the ids and ages are stored in
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class StudentCreate(BaseModel):
    """
    Body of POST /api/addstudent.

    Only name, class and age are stored. Any other Student-shaped fields a
    client sends (id, is_active, timestamps) are ignored; storage assigns them.
    """
    name: str = Field(description="Student name")
    class_: str = Field(alias="class", description="Class the student belongs to")
    age: int = Field(ge=INT32_MIN, le=INT32_MAX, description="Student age in years")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class StudentUpdate(BaseModel):
    """
    Body of PATCH /api/update/{id}.

    name, class and is_active are written; is_active accepts a boolean or the
    0/1 flag and defaults to inactive when omitted. Any other field,
    age included, is ignored.
    """
    name: str = Field(description="New student name")
    class_: str = Field(alias="class", description="New class")
    is_active: bool = Field(default=False, description="Active flag (true/false or 1/0)")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class FilterOptions(BaseModel):
    """
    Pagination parameters for GET /api/studentlist.

    Out-of-range values are clamped instead of rejected: page is at least 1,
    limit is between 1 and settings.max_page_size. Values past the 32-bit
    integer range are rejected.
    """
    page: int = Field(default=1, le=INT32_MAX, description="1-based page number")
    limit: int = Field(default=settings.default_page_size, le=INT32_MAX, description="Rows per page")

    @field_validator("page")
    @classmethod
    def clamp_page(cls, v: int) -> int:
        return max(v, 1)

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, v: int) -> int:
        return min(max(v, 1), settings.max_page_size)

    @property
    def offset(self) -> int:
        """Rows to skip before this page starts."""
        return (self.page - 1) * self.limit


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class StudentResponse(BaseModel):
    """
    Wire representation of a student row.

    is_active is a boolean here (non-zero flag ⇒ true). Both timestamps are
    required: a row read back from storage always has them.
    """
    id: int = Field(description="Server-assigned student id")
    name: str = Field(description="Student name")
    class_: str = Field(alias="class", description="Class the student belongs to")
    is_active: bool = Field(description="Whether the student is active")
    created_at: datetime = Field(description="When the row was created")
    updated_at: datetime = Field(description="When the row was last updated")
    age: int = Field(description="Student age in years")

    model_config = {"populate_by_name": True}


class StudentListResponse(BaseModel):
    """Envelope for GET /api/studentlist. count is the number of rows on this page."""
    status: Literal["ok"] = "ok"
    count: int
    notes: List[StudentResponse]


class StudentDetail(BaseModel):
    note: StudentResponse


class StudentDetailResponse(BaseModel):
    """Envelope for GET /api/getbyid/{id}."""
    status: Literal["success"] = "success"
    data: StudentDetail


class MessageResponse(BaseModel):
    """Envelope for add, update and delete: a success status and a message."""
    status: Literal["success"] = "success"
    data: str


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error envelope returned for every non-2xx response the app produces.

    Example:
        {
            "status": "fail",
            "message": "Student with ID: 42 not found",
            "request_id": "1f2e3d4c"
        }
    """
    status: Literal["fail", "error"] = Field(description="'fail' or 'error'")
    message: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Validation error details")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
