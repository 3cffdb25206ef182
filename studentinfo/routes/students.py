"""
StudentInfo API — Student Route Handlers
=========================================

What:  The five CRUD endpoints over the `studentinfo` table.
How:   Each handler parses its input, calls StudentService, and maps the
       outcome to the endpoint's envelope. Missing rows raise NotFoundError
       and storage failures surface as DatabaseError; both are rendered by
       the global exception handlers.

Envelopes:
    list     200 {"status": "ok", "count": n, "notes": [...]}
    add      200 {"status": "success", "data": "Student added successfully.."}
    get      200 {"status": "success", "data": {"note": {...}}}
             404 {"status": "fail", "message": "Student with ID: <id> not found"}
    update   200 {"status": "success", "data": "Student details updated successfully."}
             404 {"status": "error", ...}
    delete   200 {"status": "success", "data": "Student details removed successfully."}
             404 {"status": "error", "message": "Note with ID: <id> not found"}
"""

import logging

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from studentinfo.config import settings
from studentinfo.database import get_db_session
from studentinfo.exceptions import NotFoundError
from studentinfo.schemas.student import (
    INT32_MAX,
    INT32_MIN,
    ErrorResponse,
    FilterOptions,
    MessageResponse,
    StudentCreate,
    StudentDetail,
    StudentDetailResponse,
    StudentListResponse,
    StudentUpdate,
)
from studentinfo.services.student_service import student_service, to_student_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Students"])


@router.get(
    "/studentlist",
    response_model=StudentListResponse,
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List students with offset/limit pagination",
)
async def student_list(
    page: int = Query(
        default=1,
        le=INT32_MAX,
        description="1-based page number; values below 1 are treated as 1",
    ),
    limit: int = Query(
        default=settings.default_page_size,
        le=INT32_MAX,
        description="Rows per page; clamped to 1..MAX_PAGE_SIZE",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> StudentListResponse:
    """
    Return one page of students ordered by id.

    Page N of size L skips (N-1)*L rows. count is the number of rows on the
    returned page, not the table total.
    """
    opts = FilterOptions(page=page, limit=limit)
    students = await student_service.list_students(
        db=db,
        limit=opts.limit,
        offset=opts.offset,
    )
    notes = [to_student_response(student) for student in students]
    return StudentListResponse(count=len(notes), notes=notes)


@router.post(
    "/addstudent",
    response_model=MessageResponse,
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="Add a student",
)
async def add_student(
    body: StudentCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await student_service.insert_student(
        db=db,
        name=body.name,
        class_=body.class_,
        age=body.age,
    )
    return MessageResponse(data="Student added successfully..")


@router.get(
    "/getbyid/{student_id}",
    response_model=StudentDetailResponse,
    responses={
        404: {"description": "Student not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Get a single student by ID",
)
async def get_student_by_id(
    student_id: int = Path(ge=INT32_MIN, le=INT32_MAX, description="Student ID"),
    db: AsyncSession = Depends(get_db_session),
) -> StudentDetailResponse:
    student = await student_service.get_student_by_id(db=db, student_id=student_id)
    if student is None:
        raise NotFoundError.student(student_id)

    return StudentDetailResponse(data=StudentDetail(note=to_student_response(student)))


@router.patch(
    "/update/{student_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Student not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Update a student's name, class and active flag",
)
async def edit_student(
    body: StudentUpdate,
    student_id: int = Path(ge=INT32_MIN, le=INT32_MAX, description="Student ID"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    Update name, class and is_active.

    The row is read first and then written; the two statements are not
    atomic. A delete that lands in between leaves the update with zero rows
    affected, which is reported as 404.
    """
    existing = await student_service.get_student_by_id(db=db, student_id=student_id)
    if existing is None:
        raise NotFoundError.student(student_id, status="error")

    affected = await student_service.update_student(
        db=db,
        student_id=student_id,
        name=body.name,
        class_=body.class_,
        is_active=body.is_active,
    )
    if affected == 0:
        logger.warning("Student %s disappeared between read and update", student_id)
        raise NotFoundError.affected_none(student_id)

    return MessageResponse(data="Student details updated successfully.")


@router.delete(
    "/delete/{student_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Student not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Delete a student",
)
async def delete_student(
    student_id: int = Path(ge=INT32_MIN, le=INT32_MAX, description="Student ID"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    affected = await student_service.delete_student(db=db, student_id=student_id)
    if affected == 0:
        raise NotFoundError.affected_none(student_id)

    return MessageResponse(data="Student details removed successfully.")
